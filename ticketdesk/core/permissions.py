# ticketdesk/core/permissions.py
"""
Permission table.

Every guarded operation is an ``Action``. Whether an actor may perform it is
decided by one ``Rule`` looked up in ``PERMISSIONS``:

* ``roles``: roles allowed regardless of ownership.
* ``requester``: whether the ticket requester is allowed as well.
* ``requester_statuses``: when set, the requester is allowed only while the
  ticket is in one of these statuses.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ticketdesk.core.enums import STAFF_ROLES, Role, TicketStatus
from ticketdesk.core.errors import Forbidden

logger = logging.getLogger(__name__)


class Action(str, Enum):
    TICKET_READ = "ticket.read"
    TICKET_UPDATE = "ticket.update"
    TICKET_SET_STATUS = "ticket.set_status"
    TICKET_ASSIGN = "ticket.assign"
    TICKET_CLOSE = "ticket.close"
    TICKET_REOPEN = "ticket.reopen"
    TICKET_COMMENT = "ticket.comment"
    TICKET_COMMENT_PRIVATE = "ticket.comment_private"
    TICKET_DELETE = "ticket.delete"
    TICKET_LIST_ANY_REQUESTER = "ticket.list_any_requester"
    TICKET_METRICS = "ticket.metrics"
    CATEGORY_WRITE = "category.write"
    CATEGORY_DELETE = "category.delete"
    USER_LIST = "user.list"
    USER_MANAGE = "user.manage"
    ASSET_MANAGE = "asset.manage"


@dataclass(frozen=True)
class Rule:
    roles: frozenset
    requester: bool = False
    requester_statuses: frozenset | None = None


REQUESTER_EDITABLE_STATUSES = frozenset(
    {TicketStatus.NEW, TicketStatus.OPEN, TicketStatus.PENDING}
)

ADMIN_ONLY = frozenset({Role.ADMIN})

PERMISSIONS: dict[Action, Rule] = {
    Action.TICKET_READ: Rule(STAFF_ROLES, requester=True),
    Action.TICKET_UPDATE: Rule(
        STAFF_ROLES, requester=True, requester_statuses=REQUESTER_EDITABLE_STATUSES
    ),
    Action.TICKET_SET_STATUS: Rule(STAFF_ROLES),
    Action.TICKET_ASSIGN: Rule(STAFF_ROLES),
    Action.TICKET_CLOSE: Rule(STAFF_ROLES, requester=True),
    Action.TICKET_REOPEN: Rule(STAFF_ROLES, requester=True),
    Action.TICKET_COMMENT: Rule(STAFF_ROLES, requester=True),
    Action.TICKET_COMMENT_PRIVATE: Rule(STAFF_ROLES),
    Action.TICKET_DELETE: Rule(STAFF_ROLES),
    Action.TICKET_LIST_ANY_REQUESTER: Rule(STAFF_ROLES),
    Action.TICKET_METRICS: Rule(STAFF_ROLES),
    Action.CATEGORY_WRITE: Rule(STAFF_ROLES),
    Action.CATEGORY_DELETE: Rule(ADMIN_ONLY),
    Action.USER_LIST: Rule(STAFF_ROLES),
    Action.USER_MANAGE: Rule(ADMIN_ONLY),
    Action.ASSET_MANAGE: Rule(STAFF_ROLES),
}


def is_staff(role) -> bool:
    return Role(role) in STAFF_ROLES


def is_allowed(action: Action, role, is_requester: bool = False, status=None) -> bool:
    """Pure lookup against ``PERMISSIONS``."""
    rule = PERMISSIONS[action]
    if Role(role) in rule.roles:
        return True
    if not (rule.requester and is_requester):
        return False
    if rule.requester_statuses is None:
        return True
    return status is not None and TicketStatus(status) in rule.requester_statuses


def require(action: Action, actor, ticket=None, message: str | None = None) -> None:
    """Raise ``Forbidden`` unless ``actor`` may perform ``action``.

    ``ticket`` supplies ownership and status for ticket-scoped actions.
    """
    is_requester = ticket is not None and ticket.requester_id == actor.id
    status = ticket.status if ticket is not None else None
    if is_allowed(action, actor.role, is_requester, status):
        return

    logger.warning(
        "Denied %s to user %s (role=%s)%s",
        action.value,
        actor.id,
        Role(actor.role).value,
        f" on ticket {ticket.id}" if ticket is not None else "",
    )
    rule = PERMISSIONS[action]
    if is_requester and rule.requester_statuses is not None:
        raise Forbidden("Ticket can no longer be edited in its current status")
    raise Forbidden(message or "You do not have permission to perform this action")
