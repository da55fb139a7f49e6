# backend/routes/registrations.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.registration import PENDING, PendingRegistration
from models.users import User
from schemas.registration import RegistrationCreate, RegistrationDeleted, RegistrationResponse
from schemas.user import UserResponse
from utils.audit import client_ip, write_log
from utils.errors import store_errors
from utils.identifiers import new_id
from utils.registration import (
    EmailAlreadyRegistered,
    RegistrationNotFound,
    approve_registration,
    reject_registration,
)
from utils.repository import Repository
from utils.tokenJWT import get_optional_user

router = APIRouter(prefix="/pending-registrations", tags=["Registrations"])


# Registrations still waiting for a decision
@router.get("", response_model=List[RegistrationResponse])
def list_pending_registrations(db: Session = Depends(get_db)):
    with store_errors("Failed to fetch pending registrations"):
        return Repository(db, PendingRegistration).find_all(status=PENDING)


# Public signup form submission
@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def submit_registration(payload: RegistrationCreate, request: Request, db: Session = Depends(get_db)):
    registrations = Repository(db, PendingRegistration)
    with store_errors("Failed to submit registration"):
        if registrations.find_one_by("email", payload.email, case_insensitive=True):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A pending registration with this email already exists.",
            )
        if Repository(db, User).find_one_by("email", payload.email, case_insensitive=True):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A user with this email already exists.",
            )

        registration = PendingRegistration(
            id=new_id("pending"),
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            requested_role=payload.requested_role,
            status=PENDING,
        )
        try:
            registrations.insert(registration)
        except IntegrityError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A pending registration with this email already exists.",
            )

    write_log(
        db,
        user_id=None,
        action="REGISTRATION_SUBMIT",
        resource="registrations",
        ip=client_ip(request),
        meta={"registration_id": registration.id, "email": registration.email},
    )
    return registration


# Reject (delete) a registration
@router.delete("/{registration_id}", response_model=RegistrationDeleted)
def delete_registration(
    registration_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not registration_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Registration ID is required")

    with store_errors("Failed to reject registration"):
        try:
            reject_registration(db, registration_id)
        except RegistrationNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found")

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="REGISTRATION_REJECT",
        resource="registrations",
        ip=client_ip(request),
        meta={"registration_id": registration_id},
    )
    return {"message": "Registration rejected", "id": registration_id}


# Approve a registration: the applicant becomes a user
@router.post("/{registration_id}/approve", response_model=UserResponse)
def approve(
    registration_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if not registration_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Registration ID is required")

    with store_errors("Failed to approve registration"):
        try:
            user = approve_registration(db, registration_id)
        except RegistrationNotFound:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found")
        except EmailAlreadyRegistered:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A user with this email already exists.",
            )

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="REGISTRATION_APPROVE",
        resource="registrations",
        ip=client_ip(request),
        meta={"registration_id": registration_id, "user_id": user.id},
    )
    return user
