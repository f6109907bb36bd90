# ticketdesk/ticket/models.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ticketdesk.category.models import Category
from ticketdesk.core.database import Base
from ticketdesk.core.enums import Priority, TicketStatus
from ticketdesk.core.timeutils import utcnow
from ticketdesk.user.models import User


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String, default=TicketStatus.NEW.value, index=True, nullable=False)
    priority = Column(String, default=Priority.MEDIUM.value, index=True, nullable=False)

    requester_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    assigned_to_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), index=True, nullable=False)

    due_date = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    requester = relationship(User, foreign_keys=[requester_id])
    assigned_to = relationship(User, foreign_keys=[assigned_to_id])
    category = relationship(Category)
    comments = relationship(
        "Comment",
        back_populates="ticket",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )


class Comment(Base):
    __tablename__ = "ticket_comments"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id"), index=True, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    is_private = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    ticket = relationship(Ticket, back_populates="comments")
    author = relationship(User)
