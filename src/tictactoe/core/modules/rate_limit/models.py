from datetime import datetime, timedelta
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LOGIN_CODE_LIMITER = "login_code"


class RateLimitRule(BaseModel):
    """At most `limit` attempts per key within any `window`."""

    limit: int = Field(..., ge=1)
    window: timedelta

    model_config = ConfigDict(frozen=True)


class Allowed(BaseModel):
    allowed: Literal[True] = True

    model_config = ConfigDict(frozen=True)


class Denied(BaseModel):
    """Attempt rejected; the caller may retry after retry_after."""

    allowed: Literal[False] = False
    retry_after: datetime
    limiter_type: str

    model_config = ConfigDict(frozen=True)


RateLimitDecision = Allowed | Denied
