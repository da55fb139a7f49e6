# backend/utils/errors.py
import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class StoreError(HTTPException):
    """A database failure, reported to the client as 500 with the underlying message."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)
        self.details = details


@contextmanager
def store_errors(message: str):
    # Translate store failures raised inside the block into a StoreError
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise StoreError(message, str(exc)) from exc
