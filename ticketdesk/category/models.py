# ticketdesk/category/models.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String

from ticketdesk.core.database import Base
from ticketdesk.core.enums import Priority
from ticketdesk.core.timeutils import utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    priority = Column(String, default=Priority.MEDIUM.value, nullable=False)
    sla_time = Column(Integer, default=24, nullable=False)  # hours
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
