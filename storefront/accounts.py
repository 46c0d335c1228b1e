# Filename: storefront/accounts.py
# Mock sign-in. No credential checks and nothing is stored: the session user
# lives on AppState until logout.

import logging
import uuid

from storefront.errors import ValidationError
from storefront.models import Role, User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LEN = 6


def login(role: Role, name: str = "Demo User", email: str = "demo@example.com") -> User:
    user = User(id="u1", name=name, email=email, role=role)
    logger.info(f"[Auth] signed in as {role.value}")
    return user


def register(name: str, email: str, password: str, confirm_password: str) -> User:
    name, email = (name or "").strip(), (email or "").strip()
    if not name or not email or not password:
        raise ValidationError("Please fill in all fields")
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LEN:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LEN} characters")
    return User(id=f"u-{uuid.uuid4().hex[:8]}", name=name, email=email, role=Role.USER)
