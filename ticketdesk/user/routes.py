# ticketdesk/user/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ticketdesk.core.database import get_db
from ticketdesk.core.deps import get_current_user
from ticketdesk.core.enums import Role
from ticketdesk.core.pagination import PageParams
from ticketdesk.core.schemas import MessageOut
from ticketdesk.user import services as user_service
from ticketdesk.user.models import User
from ticketdesk.user.schemas import (
    AuthOut,
    ProfileUpdate,
    UserCreate,
    UserList,
    UserLogin,
    UserOut,
    UserRegister,
    UserUpdate,
)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    user, token = user_service.register(db, payload)
    return {"token": token, "user": user}


@router.post("/login", response_model=AuthOut)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user, token = user_service.login(db, payload)
    return {"token": token, "user": user}


@router.get("/profile", response_model=UserOut)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_service.update_profile(db, current_user, payload)


@router.get("", response_model=UserList)
def list_all(
    role: Role | None = Query(default=None),
    department: str | None = Query(default=None),
    params: PageParams = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    users, pagination = user_service.list_users(db, current_user, params, role, department)
    return {"count": len(users), "pagination": pagination, "users": users}


@router.post("", response_model=UserOut, status_code=201)
def create(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_service.admin_create_user(db, current_user, payload)


@router.get("/{user_id}", response_model=UserOut)
def get(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return user_service.admin_get_user(db, current_user, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return user_service.admin_update_user(db, current_user, user_id, payload)


@router.delete("/{user_id}", response_model=MessageOut)
def delete(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    user_service.admin_delete_user(db, current_user, user_id)
    return {"message": "User deleted"}
