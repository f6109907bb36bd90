# ticketdesk/asset/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ticketdesk.core.database import Base
from ticketdesk.core.enums import AssetStatus
from ticketdesk.core.timeutils import utcnow
from ticketdesk.user.models import User


class Asset(Base):
    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, index=True)
    asset_tag = Column(String, nullable=True)
    serial_number = Column(String, nullable=True)
    status = Column(String, default=AssetStatus.ACTIVE.value, nullable=False, index=True)
    location = Column(String, nullable=True)
    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    department = Column(String, nullable=True, index=True)
    purchase_date = Column(DateTime, nullable=True)
    warranty_end_date = Column(DateTime, nullable=True)
    vendor = Column(String, nullable=True)
    license_key = Column(String, nullable=True)
    expiration_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    owner_user = relationship(User)
