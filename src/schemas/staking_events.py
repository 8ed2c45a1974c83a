from typing import List

from schemas.base import CamelModel
from schemas.validator import ValidatorSlash


class ValidatorCommission(CamelModel):
    address: str
    era: int
    commission_from: float
    commission_to: float


class ValidatorStalePayoutEvent(CamelModel):
    address: str
    unclaimed_payout_eras: List[int] = []
    era: int


class StashPayout(CamelModel):
    address: str
    era: int
    amount: float
    # milliseconds
    timestamp: int


class StakingEvents(CamelModel):
    commissions: List[ValidatorCommission] = []
    slashes: List[ValidatorSlash] = []
    inactive: List[int] = []
    stale_payouts: List[ValidatorStalePayoutEvent] = []
    payouts: List[StashPayout] = []
