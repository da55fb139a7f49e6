# backend/routes/users.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from schemas.user import UserCreate, UserResponse
from utils.audit import client_ip, write_log
from utils.errors import store_errors
from utils.hashing import get_password_hash
from utils.identifiers import avatar_url, new_id
from utils.repository import Repository
from utils.tokenJWT import get_optional_user

router = APIRouter(prefix="/users", tags=["Users"])


# List every user (no pagination)
@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    with store_errors("Failed to fetch users"):
        return Repository(db, User).find_all()


# Create a user directly, bypassing the registration workflow
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    users = Repository(db, User)
    with store_errors("Failed to create user"):
        if users.find_one_by("email", payload.email, case_insensitive=True):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

        user = User(
            id=new_id("user"),
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            role=payload.role or settings.DEFAULT_ROLE,
            avatar=payload.avatar or avatar_url(payload.name),
            password=get_password_hash(payload.password) if payload.password else None,
        )
        try:
            users.insert(user)
        except IntegrityError:
            # Lost a race against a concurrent request for the same email
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="USER_CREATE",
        resource="users",
        ip=client_ip(request),
        meta={"user_id": user.id, "email": user.email},
    )
    return user
