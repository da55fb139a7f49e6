# backend/utils/identifiers.py
import uuid
from urllib.parse import urlencode

from config import settings


def new_id(prefix: str) -> str:
    """Unique record id such as ``user-3f9c...``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def user_id_for_registration(registration_id: str) -> str:
    # Deterministic, so approving the same registration twice can never create two users
    suffix = registration_id.split("-", 1)[1] if registration_id.startswith("pending-") else registration_id
    return f"user-{suffix}"


def avatar_url(name: str) -> str:
    return f"{settings.AVATAR_BASE_URL}?{urlencode({'name': name, 'background': 'random'})}"
