# ticketdesk/category/services.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ticketdesk.category.models import Category
from ticketdesk.category.schemas import CategoryCreate, CategoryUpdate
from ticketdesk.core.enums import Priority
from ticketdesk.core.errors import InvalidArgument, NotFound
from ticketdesk.core.pagination import PageParams, paginate
from ticketdesk.core.permissions import Action, require
from ticketdesk.core.timeutils import utcnow

logger = logging.getLogger(__name__)

NAME_IN_USE = "A category with this name already exists"


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFound("Category not found")
    return category


def list_categories(
    db: Session,
    params: PageParams,
    is_active: bool | None = None,
    priority: Priority | None = None,
):
    query = db.query(Category)
    if is_active is not None:
        query = query.filter(Category.is_active == is_active)
    if priority is not None:
        query = query.filter(Category.priority == priority.value)
    return paginate(query.order_by(Category.name), params)


def _ensure_name_free(db: Session, name: str) -> None:
    if db.query(Category).filter(Category.name == name).first() is not None:
        raise InvalidArgument(NAME_IN_USE)


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise InvalidArgument(NAME_IN_USE) from exc


def create_category(db: Session, actor, payload: CategoryCreate) -> Category:
    require(Action.CATEGORY_WRITE, actor)
    _ensure_name_free(db, payload.name)
    now = utcnow()
    category = Category(
        name=payload.name,
        description=payload.description,
        priority=payload.priority.value,
        sla_time=payload.sla_time,
        created_at=now,
        updated_at=now,
    )
    db.add(category)
    _commit_unique(db)
    db.refresh(category)
    logger.info("Category %s (%s) created by user %s", category.id, category.name, actor.id)
    return category


def update_category(db: Session, actor, category_id: int, payload: CategoryUpdate) -> Category:
    require(Action.CATEGORY_WRITE, actor)
    category = get_category(db, category_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("name") and changes["name"] != category.name:
        _ensure_name_free(db, changes["name"])

    for field, value in changes.items():
        if value is None:
            continue
        if field == "priority":
            value = Priority(value).value
        setattr(category, field, value)
    category.updated_at = utcnow()

    _commit_unique(db)
    db.refresh(category)
    return category


def delete_category(db: Session, actor, category_id: int) -> None:
    require(Action.CATEGORY_DELETE, actor)
    category = get_category(db, category_id)
    # tickets that reference this category are not reconciled
    db.delete(category)
    db.commit()
    logger.info("Category %s deleted by user %s", category_id, actor.id)
