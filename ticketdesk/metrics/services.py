# ticketdesk/metrics/services.py
"""
Operational metrics over the tickets created inside a time window.

Each aggregate is its own query; they share no state and may run in any
order. There is no snapshot across them.
"""

import logging
from collections import Counter
from datetime import datetime

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from ticketdesk.category.models import Category
from ticketdesk.core.errors import InvalidArgument
from ticketdesk.core.permissions import Action, require
from ticketdesk.core.timeutils import as_naive_utc, one_month_before, utcnow
from ticketdesk.metrics.schemas import TimeFormat
from ticketdesk.ticket.lifecycle import DONE_STATUSES
from ticketdesk.ticket.models import Ticket
from ticketdesk.user.models import User

logger = logging.getLogger(__name__)

_DONE_VALUES = [s.value for s in DONE_STATUSES]


def _in_window(start: datetime, end: datetime):
    return (Ticket.created_at >= start, Ticket.created_at <= end)


def total_tickets(db: Session, start: datetime, end: datetime) -> int:
    return db.query(func.count(Ticket.id)).filter(*_in_window(start, end)).scalar() or 0


def status_counts(db: Session, start: datetime, end: datetime) -> list[dict]:
    rows = (
        db.query(Ticket.status, func.count(Ticket.id))
        .filter(*_in_window(start, end))
        .group_by(Ticket.status)
        .order_by(Ticket.status)
        .all()
    )
    return [{"status": status, "count": count} for status, count in rows]


def category_counts(db: Session, start: datetime, end: datetime) -> list[dict]:
    rows = (
        db.query(Ticket.category_id, Category.name, func.count(Ticket.id))
        .outerjoin(Category, Category.id == Ticket.category_id)
        .filter(*_in_window(start, end))
        .group_by(Ticket.category_id, Category.name)
        .order_by(Ticket.category_id)
        .all()
    )
    return [
        {"category_id": category_id, "category_name": name, "count": count}
        for category_id, name, count in rows
    ]


def avg_resolution_time(db: Session, start: datetime, end: datetime) -> float:
    """Mean hours from creation to completion; 0 when nothing completed."""
    rows = (
        db.query(Ticket.created_at, Ticket.completed_at)
        .filter(*_in_window(start, end), Ticket.completed_at.isnot(None))
        .all()
    )
    if not rows:
        return 0.0
    hours = [(completed - created).total_seconds() / 3600 for created, completed in rows]
    return sum(hours) / len(hours)


def tickets_by_assignee(db: Session, start: datetime, end: datetime) -> list[dict]:
    resolved = func.sum(case((Ticket.status.in_(_DONE_VALUES), 1), else_=0))
    rows = (
        db.query(Ticket.assigned_to_id, User.name, func.count(Ticket.id), resolved)
        .outerjoin(User, User.id == Ticket.assigned_to_id)
        .filter(*_in_window(start, end), Ticket.assigned_to_id.isnot(None))
        .group_by(Ticket.assigned_to_id, User.name)
        .order_by(Ticket.assigned_to_id)
        .all()
    )
    result = []
    for assignee_id, name, count, done in rows:
        done = int(done or 0)
        result.append(
            {
                "assignee_id": assignee_id,
                "assignee_name": name,
                "count": count,
                "resolved": done,
                "resolution_rate": done / count * 100 if count else 0,
            }
        )
    return result


def _bucket(created_at: datetime, time_format: TimeFormat):
    if time_format == TimeFormat.WEEK:
        return created_at.isocalendar()[1]
    if time_format == TimeFormat.MONTH:
        return (created_at.year, created_at.month)
    return created_at.strftime("%Y-%m-%d")


def tickets_over_time(
    db: Session, start: datetime, end: datetime, time_format: TimeFormat = TimeFormat.DAY
) -> list[dict]:
    rows = db.query(Ticket.created_at).filter(*_in_window(start, end)).all()
    counts = Counter(_bucket(created_at, time_format) for (created_at,) in rows)

    result = []
    for key in sorted(counts):
        period = {"year": key[0], "month": key[1]} if time_format == TimeFormat.MONTH else key
        result.append({"period": period, "count": counts[key]})
    return result


def compute_metrics(
    db: Session,
    actor: User,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    time_format: TimeFormat = TimeFormat.DAY,
) -> dict:
    require(Action.TICKET_METRICS, actor, message="You do not have permission to view ticket metrics")

    now = utcnow()
    end = as_naive_utc(end_date) or now
    start = as_naive_utc(start_date) or one_month_before(now)
    if start > end:
        raise InvalidArgument("start_date must not be after end_date")

    logger.debug("Computing metrics for %s..%s by %s", start, end, time_format.value)
    return {
        "total_tickets": total_tickets(db, start, end),
        "status_counts": status_counts(db, start, end),
        "category_counts": category_counts(db, start, end),
        "avg_resolution_time": avg_resolution_time(db, start, end),
        "tickets_by_assignee": tickets_by_assignee(db, start, end),
        "tickets_over_time": tickets_over_time(db, start, end, time_format),
    }
