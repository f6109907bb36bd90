# ticketdesk/ticket/lifecycle.py
"""
Ticket status rules shared by every write path.

``completed_at`` is set exactly while the status is one of ``DONE_STATUSES``;
``apply_status`` is the only place that changes either field.
"""

from datetime import datetime, timedelta

from ticketdesk.core.enums import TicketStatus
from ticketdesk.core.permissions import is_staff

DONE_STATUSES = frozenset({TicketStatus.RESOLVED, TicketStatus.CLOSED})
REOPENABLE_STATUSES = DONE_STATUSES


def is_done(status) -> bool:
    return TicketStatus(status) in DONE_STATUSES


def can_reopen(status) -> bool:
    return TicketStatus(status) in REOPENABLE_STATUSES


def due_date_for(created_at: datetime, sla_hours: int) -> datetime:
    return created_at + timedelta(hours=sla_hours)


def apply_status(ticket, status, now: datetime) -> bool:
    """Move ``ticket`` to ``status`` and keep ``completed_at`` in step.

    Returns True when the status actually changed.
    """
    new = TicketStatus(status)
    old = TicketStatus(ticket.status) if ticket.status is not None else None
    ticket.status = new.value

    if is_done(new):
        if old != new or ticket.completed_at is None:
            ticket.completed_at = now
    else:
        ticket.completed_at = None
    return old != new


def close(ticket, now: datetime) -> None:
    apply_status(ticket, TicketStatus.CLOSED, now)
    # closing again restamps the completion time
    ticket.completed_at = now


def reopen(ticket, now: datetime) -> None:
    apply_status(ticket, TicketStatus.OPEN, now)


def visible_comments(comments, role) -> list:
    if is_staff(role):
        return list(comments)
    return [c for c in comments if not c.is_private]
