# ticketdesk/ticket/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ticketdesk.core.database import get_db
from ticketdesk.core.deps import get_current_user
from ticketdesk.core.pagination import PageParams
from ticketdesk.core.schemas import MessageOut
from ticketdesk.ticket import lifecycle
from ticketdesk.ticket import services as ticket_service
from ticketdesk.ticket.models import Ticket
from ticketdesk.ticket.schemas import CommentCreate, TicketCreate, TicketList, TicketOut, TicketUpdate
from ticketdesk.ticket.services import TicketFilters
from ticketdesk.user.models import User

router = APIRouter(prefix="/api/tickets", tags=["Tickets"])


def _present(ticket: Ticket, viewer: User) -> TicketOut:
    out = TicketOut.model_validate(ticket)
    visible = {c.id for c in lifecycle.visible_comments(ticket.comments, viewer.role)}
    out.comments = [c for c in out.comments if c.id in visible]
    return out


@router.post("", response_model=TicketOut, status_code=201)
def create(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = ticket_service.create_ticket(db, current_user, payload)
    return _present(ticket, current_user)


@router.get("", response_model=TicketList)
def list_all(
    filters: TicketFilters = Depends(),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tickets, pagination = ticket_service.list_tickets(db, current_user, filters, params)
    return {
        "count": len(tickets),
        "pagination": pagination,
        "tickets": [_present(t, current_user) for t in tickets],
    }


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ticket = ticket_service.get_ticket(db, current_user, ticket_id)
    return _present(ticket, current_user)


@router.put("/{ticket_id}", response_model=TicketOut)
def update(
    ticket_id: int,
    payload: TicketUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = ticket_service.update_ticket(db, current_user, ticket_id, payload)
    return _present(ticket, current_user)


@router.post("/{ticket_id}/comments", response_model=TicketOut, status_code=201)
def comment(
    ticket_id: int,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = ticket_service.add_comment(db, current_user, ticket_id, payload)
    return _present(ticket, current_user)


@router.put("/{ticket_id}/close", response_model=TicketOut)
def close(ticket_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ticket = ticket_service.close_ticket(db, current_user, ticket_id)
    return _present(ticket, current_user)


@router.put("/{ticket_id}/reopen", response_model=TicketOut)
def reopen(ticket_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ticket = ticket_service.reopen_ticket(db, current_user, ticket_id)
    return _present(ticket, current_user)


@router.delete("/{ticket_id}", response_model=MessageOut)
def delete(ticket_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    ticket_service.delete_ticket(db, current_user, ticket_id)
    return {"message": "Ticket deleted"}
