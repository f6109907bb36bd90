# ticketdesk/metrics/schemas.py
from enum import Enum

from pydantic import BaseModel

from ticketdesk.core.enums import TicketStatus


class TimeFormat(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class StatusCount(BaseModel):
    status: TicketStatus
    count: int


class CategoryCount(BaseModel):
    category_id: int
    category_name: str | None = None
    count: int


class AssigneeLoad(BaseModel):
    assignee_id: int
    assignee_name: str | None = None
    count: int
    resolved: int
    resolution_rate: float


class MonthPeriod(BaseModel):
    year: int
    month: int


class TimeBucket(BaseModel):
    # "YYYY-MM-DD" for day, ISO week number for week
    period: str | int | MonthPeriod
    count: int


class TicketMetrics(BaseModel):
    total_tickets: int
    status_counts: list[StatusCount]
    category_counts: list[CategoryCount]
    avg_resolution_time: float
    tickets_by_assignee: list[AssigneeLoad]
    tickets_over_time: list[TimeBucket]
