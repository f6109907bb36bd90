# ticketdesk/user/models.py
from sqlalchemy import Column, DateTime, Integer, String

from ticketdesk.core.database import Base
from ticketdesk.core.enums import Role
from ticketdesk.core.timeutils import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, default=Role.USER.value, nullable=False, index=True)
    department = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
