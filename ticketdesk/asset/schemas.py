# ticketdesk/asset/schemas.py
from datetime import datetime

from pydantic import BaseModel

from ticketdesk.core.enums import AssetStatus, AssetType
from ticketdesk.core.schemas import RequiredStr
from ticketdesk.user.schemas import UserBrief


class AssetFields(BaseModel):
    asset_tag: str | None = None
    serial_number: str | None = None
    location: str | None = None
    owner_user_id: int | None = None
    department: str | None = None
    purchase_date: datetime | None = None
    warranty_end_date: datetime | None = None
    vendor: str | None = None
    license_key: str | None = None
    expiration_date: datetime | None = None
    notes: str | None = None


class AssetCreate(AssetFields):
    name: RequiredStr
    type: AssetType
    status: AssetStatus = AssetStatus.ACTIVE


class AssetUpdate(AssetFields):
    name: RequiredStr | None = None
    type: AssetType | None = None
    status: AssetStatus | None = None


class AssetOut(AssetFields):
    id: int
    name: str
    type: AssetType
    status: AssetStatus
    owner_user: UserBrief | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssetList(BaseModel):
    count: int
    assets: list[AssetOut]
