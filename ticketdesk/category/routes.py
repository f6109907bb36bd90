# ticketdesk/category/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ticketdesk.category import services as category_service
from ticketdesk.category.schemas import CategoryCreate, CategoryList, CategoryOut, CategoryUpdate
from ticketdesk.core.database import get_db
from ticketdesk.core.deps import get_current_user
from ticketdesk.core.enums import Priority
from ticketdesk.core.pagination import PageParams
from ticketdesk.core.schemas import MessageOut
from ticketdesk.user.models import User

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=CategoryList)
def list_all(
    is_active: bool | None = Query(default=None),
    priority: Priority | None = Query(default=None),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    categories, pagination = category_service.list_categories(db, params, is_active, priority)
    return {"count": len(categories), "pagination": pagination, "categories": categories}


@router.get("/{category_id}", response_model=CategoryOut)
def get(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return category_service.get_category(db, category_id)


@router.post("", response_model=CategoryOut, status_code=201)
def create(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return category_service.create_category(db, current_user, payload)


@router.put("/{category_id}", response_model=CategoryOut)
def update(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return category_service.update_category(db, current_user, category_id, payload)


@router.delete("/{category_id}", response_model=MessageOut)
def delete(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    category_service.delete_category(db, current_user, category_id)
    return {"message": "Category deleted"}
