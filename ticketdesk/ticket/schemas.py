# ticketdesk/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel

from ticketdesk.category.schemas import CategoryBrief
from ticketdesk.core.enums import Priority, Role, TicketStatus
from ticketdesk.core.pagination import Pagination
from ticketdesk.core.schemas import RequiredStr


class TicketBase(BaseModel):
    title: RequiredStr
    description: RequiredStr


class TicketCreate(TicketBase):
    category_id: int
    priority: Priority | None = None


class TicketUpdate(BaseModel):
    title: RequiredStr | None = None
    description: RequiredStr | None = None
    status: TicketStatus | None = None
    priority: Priority | None = None
    category_id: int | None = None
    assigned_to_id: int | None = None


class CommentCreate(BaseModel):
    # missing or blank content is rejected by the service with a 400
    content: str | None = None
    is_private: bool = False


class Person(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    department: str | None = None

    model_config = {"from_attributes": True}


class CommentOut(BaseModel):
    id: int
    author: Person | None = None
    content: str
    is_private: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class TicketOut(TicketBase):
    id: int
    status: TicketStatus
    priority: Priority
    # None once the referenced row has been deleted
    requester: Person | None = None
    assigned_to: Person | None = None
    category: CategoryBrief | None = None
    comments: list[CommentOut] = []
    due_date: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TicketList(BaseModel):
    count: int
    pagination: Pagination
    tickets: list[TicketOut]
