# backend/utils/registration.py
"""Approval of pending registrations.

A registration is either approved (it becomes a ``User`` and the pending row
is removed) or rejected (the pending row is removed). Approval writes both
tables inside one session transaction, so a failure leaves neither change
behind. The new user id is derived from the registration id, which makes a
repeated approval collide on the primary key instead of creating a second
account.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.registration import PendingRegistration
from models.users import User
from utils.identifiers import avatar_url, user_id_for_registration
from utils.repository import Repository

logger = logging.getLogger(__name__)


class RegistrationNotFound(Exception):
    pass


class EmailAlreadyRegistered(Exception):
    pass


def approve_registration(db: Session, registration_id: str) -> User:
    registrations = Repository(db, PendingRegistration)
    users = Repository(db, User)

    registration = registrations.find_by_id(registration_id)
    if registration is None:
        raise RegistrationNotFound(registration_id)

    if users.find_one_by("email", registration.email, case_insensitive=True):
        raise EmailAlreadyRegistered(registration.email)

    user = User(
        id=user_id_for_registration(registration.id),
        name=registration.name,
        email=registration.email.lower(),
        phone=registration.phone,
        role=registration.requested_role,
        avatar=avatar_url(registration.name),
    )

    try:
        users.insert(user, commit=False)
        registrations.delete_by_id(registration.id, commit=False)
        users.commit_or_rollback()
    except IntegrityError as exc:
        db.rollback()
        raise EmailAlreadyRegistered(registration.email) from exc
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("Registration %s approved as user %s", registration_id, user.id)
    return user


def reject_registration(db: Session, registration_id: str) -> None:
    if not Repository(db, PendingRegistration).delete_by_id(registration_id):
        raise RegistrationNotFound(registration_id)
    logger.info("Registration %s rejected", registration_id)
