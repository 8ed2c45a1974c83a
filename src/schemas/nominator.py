from typing import List, Optional

from schemas.base import CamelModel
from schemas.rewards import StashRewards
from schemas.validator import Balance


class NominatorNomination(CamelModel):
    account_id: str
    balance: Balance
    targets: List[str] = []
    rewards: Optional[StashRewards] = None


class NominationRecordInfo(CamelModel):
    stash: str
    validators: List[str] = []
    amount: str
    strategy: int = 0
    tag: str
    chain: str
    extrinsic_hash: Optional[str] = None
    ref_key: Optional[str] = None
