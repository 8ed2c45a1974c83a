import re
from typing import List, Optional

from pydantic import field_validator

from core import constants
from schemas.base import CamelModel

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidatorListOptions(CamelModel):
    page: int = 0
    size: int = constants.DEFAULT_PAGE_SIZE
    apy_min: float = 0.0
    apy_max: float = 1.0
    # request-facing scale 0..1
    commission_min: float = 0.0
    commission_max: float = 1.0
    has_verified_identity: bool = False
    only_program_members: bool = False


class NominationRequest(CamelModel):
    stash: str
    validators: List[str]
    amount: int
    strategy: constants.NominationStrategy = constants.NominationStrategy.DEFAULT


class NominationResultRequest(CamelModel):
    tag: str
    extrinsic_hash: str
    ref_key: Optional[str] = None


class NewsletterSubscriberRequest(CamelModel):
    email: str

    @field_validator("email")
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v.lower()
