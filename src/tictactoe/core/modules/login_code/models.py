"""Login code table entries and issuance result."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ValidCode(BaseModel):
    """Redeemable code bound to exactly one user."""

    kind: Literal["valid"] = "valid"
    user_id: str
    expiration_date: datetime

    model_config = ConfigDict(frozen=True)


class ReservedCode(BaseModel):
    """Used or expired code kept out of circulation until expiration_date."""

    kind: Literal["reserved"] = "reserved"
    expiration_date: datetime

    model_config = ConfigDict(frozen=True)


CodeEntry = ValidCode | ReservedCode


class IssuedCode(BaseModel):
    """Login code as handed to the device that requested it."""

    code: str = Field(..., description="4-digit login code")
    issue_date: datetime = Field(..., description="When the code was issued")
    expiration_date: datetime = Field(..., description="When the code stops being redeemable")
