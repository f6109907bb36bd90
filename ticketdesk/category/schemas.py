# ticketdesk/category/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field

from ticketdesk.core.enums import Priority
from ticketdesk.core.pagination import Pagination
from ticketdesk.core.schemas import RequiredStr, TrimmedStr


class CategoryCreate(BaseModel):
    name: RequiredStr
    description: TrimmedStr | None = None
    priority: Priority = Priority.MEDIUM
    sla_time: int = Field(default=24, gt=0, description="SLA in hours")


class CategoryUpdate(BaseModel):
    name: RequiredStr | None = None
    description: TrimmedStr | None = None
    is_active: bool | None = None
    priority: Priority | None = None
    sla_time: int | None = Field(default=None, gt=0)


class CategoryOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    is_active: bool
    priority: Priority
    sla_time: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryBrief(BaseModel):
    id: int
    name: str
    priority: Priority
    sla_time: int

    model_config = {"from_attributes": True}


class CategoryList(BaseModel):
    count: int
    pagination: Pagination
    categories: list[CategoryOut]
