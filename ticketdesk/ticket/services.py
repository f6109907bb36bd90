# ticketdesk/ticket/services.py
import logging
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ticketdesk.category.services import get_category
from ticketdesk.core.enums import Priority, TicketStatus
from ticketdesk.core.errors import InvalidArgument, InvalidState, NotFound
from ticketdesk.core.pagination import PageParams, paginate
from ticketdesk.core.permissions import Action, is_allowed, is_staff, require
from ticketdesk.core.timeutils import as_naive_utc, utcnow
from ticketdesk.ticket import lifecycle
from ticketdesk.ticket.models import Comment, Ticket
from ticketdesk.ticket.schemas import CommentCreate, TicketCreate, TicketUpdate
from ticketdesk.user.models import User

logger = logging.getLogger(__name__)


class TicketFilters:
    def __init__(
        self,
        status: TicketStatus | None = None,
        priority: Priority | None = None,
        category_id: int | None = None,
        assigned_to_id: int | None = None,
        requester_id: int | None = None,
        search: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ):
        self.status = status
        self.priority = priority
        self.category_id = category_id
        self.assigned_to_id = assigned_to_id
        self.requester_id = requester_id
        self.search = search
        self.start_date = as_naive_utc(start_date)
        self.end_date = as_naive_utc(end_date)


def _load(db: Session, ticket_id: int) -> Ticket:
    ticket = db.get(Ticket, ticket_id)
    if ticket is None:
        raise NotFound("Ticket not found")
    return ticket


def create_ticket(db: Session, actor: User, payload: TicketCreate) -> Ticket:
    category = get_category(db, payload.category_id)
    now = utcnow()
    priority = payload.priority or Priority(category.priority)

    ticket = Ticket(
        title=payload.title,
        description=payload.description,
        priority=priority.value,
        requester_id=actor.id,
        category_id=category.id,
        due_date=lifecycle.due_date_for(now, category.sla_time),
        created_at=now,
        updated_at=now,
    )
    lifecycle.apply_status(ticket, TicketStatus.NEW, now)
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    logger.info("Ticket %s created by user %s in category %s", ticket.id, actor.id, category.id)
    return ticket


def list_tickets(db: Session, actor: User, filters: TicketFilters, params: PageParams):
    query = db.query(Ticket)

    if is_allowed(Action.TICKET_LIST_ANY_REQUESTER, actor.role):
        if filters.requester_id is not None:
            query = query.filter(Ticket.requester_id == filters.requester_id)
    else:
        query = query.filter(Ticket.requester_id == actor.id)

    if filters.status is not None:
        query = query.filter(Ticket.status == filters.status.value)
    if filters.priority is not None:
        query = query.filter(Ticket.priority == filters.priority.value)
    if filters.category_id is not None:
        query = query.filter(Ticket.category_id == filters.category_id)
    if filters.assigned_to_id is not None:
        query = query.filter(Ticket.assigned_to_id == filters.assigned_to_id)
    if filters.search:
        query = query.filter(
            or_(
                Ticket.title.icontains(filters.search, autoescape=True),
                Ticket.description.icontains(filters.search, autoescape=True),
            )
        )
    if filters.start_date is not None:
        query = query.filter(Ticket.created_at >= filters.start_date)
    if filters.end_date is not None:
        query = query.filter(Ticket.created_at <= filters.end_date)

    return paginate(query.order_by(Ticket.created_at.desc(), Ticket.id.desc()), params)


def get_ticket(db: Session, actor: User, ticket_id: int) -> Ticket:
    ticket = _load(db, ticket_id)
    require(Action.TICKET_READ, actor, ticket, "You do not have permission to view this ticket")
    return ticket


def update_ticket(db: Session, actor: User, ticket_id: int, payload: TicketUpdate) -> Ticket:
    ticket = _load(db, ticket_id)
    require(Action.TICKET_UPDATE, actor, ticket, "You do not have permission to update this ticket")
    changes = payload.model_dump(exclude_unset=True)

    # validate everything before touching the row
    can_assign = is_allowed(Action.TICKET_ASSIGN, actor.role)
    assignee_id = changes.get("assigned_to_id")
    if assignee_id is not None:
        require(Action.TICKET_ASSIGN, actor, message="You do not have permission to assign tickets")
        assignee = db.get(User, assignee_id)
        if assignee is None:
            raise NotFound("Assignee not found")
        if not is_staff(assignee.role):
            raise InvalidArgument("Only staff can be assigned")
    if changes.get("category_id") is not None:
        get_category(db, changes["category_id"])

    now = utcnow()
    if payload.title is not None:
        ticket.title = payload.title
    if payload.description is not None:
        ticket.description = payload.description
    if payload.priority is not None:
        ticket.priority = payload.priority.value
    if payload.category_id is not None:
        ticket.category_id = payload.category_id
    if "assigned_to_id" in changes and can_assign:
        ticket.assigned_to_id = assignee_id
    if payload.status is not None and is_allowed(Action.TICKET_SET_STATUS, actor.role):
        lifecycle.apply_status(ticket, payload.status, now)
    ticket.updated_at = now

    db.commit()
    db.refresh(ticket)
    logger.info("Ticket %s updated by user %s: %s", ticket.id, actor.id, sorted(changes))
    return ticket


def add_comment(db: Session, actor: User, ticket_id: int, payload: CommentCreate) -> Ticket:
    content = (payload.content or "").strip()
    if not content:
        raise InvalidArgument("Comment content is required")
    if payload.is_private:
        require(
            Action.TICKET_COMMENT_PRIVATE,
            actor,
            message="You do not have permission to add private comments",
        )
    ticket = _load(db, ticket_id)
    require(Action.TICKET_COMMENT, actor, ticket, "You do not have permission to comment on this ticket")

    now = utcnow()
    ticket.comments.append(
        Comment(author_id=actor.id, content=content, is_private=payload.is_private, created_at=now)
    )
    ticket.updated_at = now
    db.commit()
    db.refresh(ticket)
    logger.info("User %s commented on ticket %s (private=%s)", actor.id, ticket.id, payload.is_private)
    return ticket


def close_ticket(db: Session, actor: User, ticket_id: int) -> Ticket:
    ticket = _load(db, ticket_id)
    require(Action.TICKET_CLOSE, actor, ticket, "You do not have permission to close this ticket")

    now = utcnow()
    lifecycle.close(ticket, now)
    ticket.updated_at = now
    db.commit()
    db.refresh(ticket)
    logger.info("Ticket %s closed by user %s", ticket.id, actor.id)
    return ticket


def reopen_ticket(db: Session, actor: User, ticket_id: int) -> Ticket:
    ticket = _load(db, ticket_id)
    require(Action.TICKET_REOPEN, actor, ticket, "You do not have permission to reopen this ticket")
    if not lifecycle.can_reopen(ticket.status):
        raise InvalidState("Only closed or resolved tickets can be reopened")

    now = utcnow()
    lifecycle.reopen(ticket, now)
    ticket.updated_at = now
    db.commit()
    db.refresh(ticket)
    logger.info("Ticket %s reopened by user %s", ticket.id, actor.id)
    return ticket


def delete_ticket(db: Session, actor: User, ticket_id: int) -> None:
    ticket = _load(db, ticket_id)
    require(Action.TICKET_DELETE, actor, ticket, "You do not have permission to delete this ticket")
    db.delete(ticket)
    db.commit()
    logger.info("Ticket %s deleted by user %s", ticket_id, actor.id)
