from typing import List, Optional

from pydantic import field_validator

from schemas.base import CamelModel
from utils.extension_utils import from_hex, from_optional_hex


class Identity(CamelModel):
    display: Optional[str] = None
    parent: Optional[str] = None
    sub: Optional[str] = None
    is_verified: Optional[bool] = None


class StatusChange(CamelModel):
    commission: float = 0


class StakerPoint(CamelModel):
    era: int
    points: int


class ExposureOther(CamelModel):
    who: str
    value: int

    @field_validator("value", mode="before")
    def decode_value(cls, v):
        return from_hex(v)


class Exposure(CamelModel):
    total: int = 0
    own: int = 0
    others: List[ExposureOther] = []

    @field_validator("total", "own", mode="before")
    def decode_balance(cls, v):
        return from_hex(v)


class Balance(CamelModel):
    locked_balance: int = 0
    free_balance: int = 0

    @field_validator("locked_balance", "free_balance", mode="before")
    def decode_balance(cls, v):
        return from_hex(v)


class NominatorRef(CamelModel):
    address: str
    balance: Optional[Balance] = None


class ValidatorSlashNominator(CamelModel):
    address: str
    value: int

    @field_validator("value", mode="before")
    def decode_value(cls, v):
        return from_hex(v)


class ValidatorSlash(CamelModel):
    address: str
    era: int
    total: int = 0
    others: List[ValidatorSlashNominator] = []

    @field_validator("total", mode="before")
    def decode_total(cls, v):
        return from_hex(v)


class NominationInfo(CamelModel):
    # None only in validator history entries that were not backfilled
    nominators: Optional[List[NominatorRef]] = None
    nominator_count: int = 0
    era: int
    exposure: Exposure
    commission: float
    apy: float
    unclaimed_eras: List[int] = []
    total: int = 0
    self_stake: Optional[int] = None

    @field_validator("total", mode="before")
    def decode_total(cls, v):
        return from_hex(v)

    @field_validator("self_stake", mode="before")
    def decode_self_stake(cls, v):
        return from_optional_hex(v)


class ValidatorNominationInfo(CamelModel):
    id: str
    status_change: StatusChange
    identity: Optional[Identity] = None
    info: NominationInfo
    staker_points: Optional[List[StakerPoint]] = None
    average_apy: Optional[float] = None
    slashes: List[ValidatorSlash] = []
    blocked: bool = False


class ValidatorNominationTrend(CamelModel):
    id: str
    status_change: StatusChange
    identity: Optional[Identity] = None
    average_apy: Optional[float] = None
    staker_points: Optional[List[StakerPoint]] = None
    info: List[NominationInfo] = []
