# backend/models/users.py
from sqlalchemy import Column, String, DateTime, func
from database import Base

# Represents an application member who can sign in and work on projects
class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # always stored lowercase
    phone = Column(String, nullable=True)
    password = Column(String, nullable=True)  # passlib hash, empty for seeded/approved accounts
    role = Column(String, nullable=False)
    avatar = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
