import re
import secrets
from datetime import UTC, datetime

NICK_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-_]*$")


def is_nickname(value: str) -> bool:
    return bool(NICK_RE.fullmatch(value))


def generate_id() -> str:
    return secrets.token_urlsafe(16)


def now() -> datetime:
    return datetime.now(UTC)
