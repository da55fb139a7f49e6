# backend/models/registration.py
from sqlalchemy import Column, String, DateTime, func
from database import Base

PENDING = "pending"

# A signup request waiting for an administrator to approve or reject it.
# Approval turns it into a User and removes this row.
class PendingRegistration(Base):
    __tablename__ = "pending_registrations"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    phone = Column(String, nullable=True)
    requested_role = Column(String, nullable=False)
    status = Column(String, nullable=False, default=PENDING, server_default=PENDING)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
