"""Security helpers for hashing, token generation and webhook verification."""

from __future__ import annotations

import hashlib
import hmac
from datetime import timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from projtrack.config import get_settings
from projtrack.utils import utc_now

WEBHOOK_SIGNATURE_PREFIX = "sha256="

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = utc_now() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm="HS256")


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=["HS256"])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


# ---- Webhooks ----


def compute_webhook_signature(raw_body: bytes, secret: str) -> str:
    """Return the ``sha256=<hex>`` signature GitHub sends for ``raw_body``."""

    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{WEBHOOK_SIGNATURE_PREFIX}{digest}"


def verify_webhook_signature(
    raw_body: bytes, provided_signature: str | None, secret: str | None
) -> bool:
    """Return ``True`` when ``provided_signature`` authenticates ``raw_body``.

    Without a configured secret verification is skipped and every payload is
    accepted; enabling it is a deployment decision. With a secret, a missing
    or different signature yields ``False``. The comparison runs in constant
    time over the exact bytes received.
    """

    if not secret:
        return True
    if not provided_signature:
        return False

    expected = compute_webhook_signature(raw_body, secret)
    return hmac.compare_digest(
        expected.encode("utf-8"), provided_signature.encode("utf-8")
    )
