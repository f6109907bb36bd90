# ticketdesk/asset/services.py
import logging
from datetime import datetime
from enum import Enum

from sqlalchemy.orm import Session

from ticketdesk.asset.models import Asset
from ticketdesk.asset.schemas import AssetCreate, AssetUpdate
from ticketdesk.core.enums import AssetStatus, AssetType
from ticketdesk.core.errors import NotFound
from ticketdesk.core.permissions import Action, require
from ticketdesk.core.timeutils import as_naive_utc, utcnow
from ticketdesk.user.models import User

logger = logging.getLogger(__name__)


def _column_value(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return as_naive_utc(value)
    return value


def _ensure_owner(db: Session, owner_user_id: int | None) -> None:
    if owner_user_id is not None and db.get(User, owner_user_id) is None:
        raise NotFound("Owner user not found")


def _load(db: Session, asset_id: int) -> Asset:
    asset = db.get(Asset, asset_id)
    if asset is None:
        raise NotFound("Asset not found")
    return asset


def create_asset(db: Session, actor: User, payload: AssetCreate) -> Asset:
    require(Action.ASSET_MANAGE, actor)
    _ensure_owner(db, payload.owner_user_id)
    now = utcnow()
    fields = {k: _column_value(v) for k, v in payload.model_dump().items()}
    asset = Asset(**fields, created_at=now, updated_at=now)
    db.add(asset)
    db.commit()
    db.refresh(asset)
    logger.info("Asset %s created by user %s", asset.id, actor.id)
    return asset


def list_assets(
    db: Session,
    actor: User,
    type: AssetType | None = None,
    status: AssetStatus | None = None,
    department: str | None = None,
    owner_user_id: int | None = None,
) -> list[Asset]:
    require(Action.ASSET_MANAGE, actor)
    query = db.query(Asset)
    if type is not None:
        query = query.filter(Asset.type == type.value)
    if status is not None:
        query = query.filter(Asset.status == status.value)
    if department:
        query = query.filter(Asset.department == department)
    if owner_user_id is not None:
        query = query.filter(Asset.owner_user_id == owner_user_id)
    return query.order_by(Asset.id).all()


def get_asset(db: Session, actor: User, asset_id: int) -> Asset:
    require(Action.ASSET_MANAGE, actor)
    return _load(db, asset_id)


def update_asset(db: Session, actor: User, asset_id: int, payload: AssetUpdate) -> Asset:
    require(Action.ASSET_MANAGE, actor)
    asset = _load(db, asset_id)
    changes = payload.model_dump(exclude_unset=True)
    if "owner_user_id" in changes:
        _ensure_owner(db, changes["owner_user_id"])

    for field, value in changes.items():
        # required columns cannot be cleared
        if value is None and field in ("name", "type", "status"):
            continue
        setattr(asset, field, _column_value(value))
    asset.updated_at = utcnow()
    db.commit()
    db.refresh(asset)
    return asset


def delete_asset(db: Session, actor: User, asset_id: int) -> None:
    require(Action.ASSET_MANAGE, actor)
    asset = _load(db, asset_id)
    db.delete(asset)
    db.commit()
    logger.info("Asset %s deleted by user %s", asset_id, actor.id)
