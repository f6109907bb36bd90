# ticketdesk/user/services.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ticketdesk.core.enums import Role
from ticketdesk.core.errors import InvalidArgument, NotFound, Unauthenticated
from ticketdesk.core.pagination import PageParams, paginate
from ticketdesk.core.permissions import Action, require
from ticketdesk.core.security import create_access_token, hash_password, verify_password
from ticketdesk.core.timeutils import utcnow
from ticketdesk.user.models import User
from ticketdesk.user.schemas import (
    ProfileUpdate,
    UserCreate,
    UserLogin,
    UserRegister,
    UserUpdate,
)

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "This email is already in use"


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def _ensure_email_free(db: Session, email: str, exclude_id: int | None = None) -> None:
    query = db.query(User).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise InvalidArgument(EMAIL_IN_USE)


def _commit_unique(db: Session) -> None:
    # the UNIQUE constraint catches concurrent check-then-write races
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise InvalidArgument(EMAIL_IN_USE) from exc


def _insert(db: Session, data: dict, role: Role) -> User:
    _ensure_email_free(db, data["email"])
    now = utcnow()
    user = User(
        name=data["name"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
        role=role.value,
        department=data.get("department"),
        phone=data.get("phone"),
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    _commit_unique(db)
    db.refresh(user)
    return user


def register(db: Session, payload: UserRegister) -> tuple[User, str]:
    """Self-service sign up; always yields a plain ``user``."""
    user = _insert(db, payload.model_dump(), Role.USER)
    logger.info("Registered user %s", user.id)
    return user, create_access_token(user.id)


def login(db: Session, payload: UserLogin) -> tuple[User, str]:
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        raise Unauthenticated("Invalid credentials")
    return user, create_access_token(user.id)


def _apply_changes(db: Session, user: User, changes: dict) -> User:
    if changes.get("email") and changes["email"] != user.email:
        _ensure_email_free(db, changes["email"], exclude_id=user.id)

    for field in ("name", "email", "department", "phone"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])
    if changes.get("role") is not None:
        user.role = Role(changes["role"]).value
    if changes.get("password"):
        user.password_hash = hash_password(changes["password"])
    user.updated_at = utcnow()

    _commit_unique(db)
    db.refresh(user)
    return user


def update_profile(db: Session, actor: User, payload: ProfileUpdate) -> User:
    return _apply_changes(db, actor, payload.model_dump(exclude_unset=True))


def list_users(
    db: Session,
    actor: User,
    params: PageParams,
    role: Role | None = None,
    department: str | None = None,
):
    require(Action.USER_LIST, actor)
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role.value)
    if department:
        query = query.filter(User.department == department)
    return paginate(query.order_by(User.created_at.desc(), User.id.desc()), params)


def admin_get_user(db: Session, actor: User, user_id: int) -> User:
    require(Action.USER_MANAGE, actor)
    return get_user(db, user_id)


def admin_create_user(db: Session, actor: User, payload: UserCreate) -> User:
    require(Action.USER_MANAGE, actor)
    user = _insert(db, payload.model_dump(), payload.role)
    logger.info("User %s created user %s with role %s", actor.id, user.id, user.role)
    return user


def admin_update_user(db: Session, actor: User, user_id: int, payload: UserUpdate) -> User:
    require(Action.USER_MANAGE, actor)
    user = get_user(db, user_id)
    return _apply_changes(db, user, payload.model_dump(exclude_unset=True))


def admin_delete_user(db: Session, actor: User, user_id: int) -> None:
    require(Action.USER_MANAGE, actor)
    user = get_user(db, user_id)
    if user.id == actor.id:
        raise InvalidArgument("You cannot delete your own account")
    # tickets and assets referencing this user are left untouched
    db.delete(user)
    db.commit()
    logger.info("User %s deleted user %s", actor.id, user_id)
