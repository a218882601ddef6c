"""Sign-in against the configured store."""

import logging
from typing import Optional

from data.store import DataStore, StoreError
from models.auth import AuthUser

logger = logging.getLogger(__name__)


def authenticate(store: DataStore, email: str, password: str) -> Optional[AuthUser]:
    """Return the signed-in user, or None when the credentials are rejected."""
    email = (email or "").strip().lower()
    if not email or not password:
        return None
    try:
        user = store.authenticate(email, password)
    except StoreError as e:
        logger.error(f"Sign-in failed for {email}: {e}")
        return None
    if user:
        logger.info(f"User signed in: {user.email}")
    else:
        logger.warning(f"Invalid credentials for {email}")
    return user
