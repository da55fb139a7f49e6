# backend/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from utils.audit import client_ip, write_log
from utils.errors import store_errors
from utils.hashing import verify_password
from utils.repository import Repository
from utils.tokenJWT import create_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


# Authenticate user and issue JWT token.
# Accounts created without a password (seeded or approved) sign in by email alone.
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    with store_errors("Login failed"):
        db_user = Repository(db, User).find_one_by("email", payload.email, case_insensitive=True)

    password_ok = db_user is not None and (
        not db_user.password
        or (payload.password is not None and verify_password(payload.password, db_user.password))
    )

    # Validate credentials and log failure on error
    if not password_ok:
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": db_user.id, "role": db_user.role})

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request), meta={"email": db_user.email})

    return schemas.LoginResponse(user=schemas.UserResponse.model_validate(db_user), token=access_token)


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
