# ticketdesk/asset/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ticketdesk.asset import services as asset_service
from ticketdesk.asset.schemas import AssetCreate, AssetList, AssetOut, AssetUpdate
from ticketdesk.core.database import get_db
from ticketdesk.core.deps import get_current_user
from ticketdesk.core.enums import AssetStatus, AssetType
from ticketdesk.core.schemas import MessageOut
from ticketdesk.user.models import User

router = APIRouter(prefix="/api/assets", tags=["Assets"])


@router.post("", response_model=AssetOut, status_code=201)
def create(payload: AssetCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return asset_service.create_asset(db, current_user, payload)


@router.get("", response_model=AssetList)
def list_all(
    type: AssetType | None = Query(default=None),
    status: AssetStatus | None = Query(default=None),
    department: str | None = Query(default=None),
    owner_user_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    assets = asset_service.list_assets(db, current_user, type, status, department, owner_user_id)
    return {"count": len(assets), "assets": assets}


@router.get("/{asset_id}", response_model=AssetOut)
def get(asset_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return asset_service.get_asset(db, current_user, asset_id)


@router.put("/{asset_id}", response_model=AssetOut)
def update(
    asset_id: int,
    payload: AssetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return asset_service.update_asset(db, current_user, asset_id, payload)


@router.delete("/{asset_id}", response_model=MessageOut)
def delete(asset_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    asset_service.delete_asset(db, current_user, asset_id)
    return {"message": "Asset deleted"}
