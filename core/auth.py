"""
Credential Check

Two fixed demo accounts, no user store. A successful login returns the
user record and an opaque session token; the dashboard keeps both in its
session state.
"""

import logging
import secrets
from dataclasses import dataclass, asdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    id: str
    username: str
    role: str          # "admin" or "operator"
    name: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# username -> (password, user)
DEMO_ACCOUNTS: Dict[str, tuple] = {
    "admin": ("admin123", User(id="1", username="admin", role="admin", name="Administrator")),
    "operator": ("operator123", User(id="2", username="operator", role="operator", name="Operator User")),
}


def authenticate(username: str, password: str) -> Optional[User]:
    """
    Check a username/password pair against the demo accounts.

    Returns:
        The matching User, or None if the pair is not accepted
    """
    account = DEMO_ACCOUNTS.get(username)
    if account is None or not secrets.compare_digest(account[0], password):
        logger.warning("Rejected login for %r", username)
        return None

    logger.info("User %s logged in", username)
    return account[1]


def new_session_token() -> str:
    return f"session_{secrets.token_hex(16)}"
