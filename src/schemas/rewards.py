from typing import List, Optional

from schemas.base import CamelModel


class StashEraReward(CamelModel):
    era: int
    amount: float
    # milliseconds
    timestamp: int
    price: Optional[float] = None
    total: Optional[float] = None


class StashRewards(CamelModel):
    stash: str
    era_rewards: List[StashEraReward] = []
    total_in_fiat: float = 0.0


class CoinPrice(CamelModel):
    # UTC midnight, seconds
    timestamp: int
    price: float
