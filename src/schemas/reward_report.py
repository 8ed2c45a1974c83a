from typing import List, Optional

from schemas.base import CamelModel


class StakingRewardsAddress(CamelModel):
    name: str = ""
    address: str
    start_balance: float = 0.0
    network: str


class StakingRewardsCollectorInput(CamelModel):
    start: str
    end: str
    currency: str
    price_data: str
    export_output: str = "true"
    addresses: List[StakingRewardsAddress]


class SRCDailyRewards(CamelModel):
    day: str
    price: float = 0.0
    volume: float = 0.0
    amount_human_readable: float = 0.0
    value_fiat: float = 0.0


class SRCRewardsData(CamelModel):
    number_rewards_parsed: int = 0
    number_of_days: int = 0
    list: List[SRCDailyRewards] = []


class SRCResult(CamelModel):
    address: str
    network: Optional[str] = None
    currency: Optional[str] = None
    start_balance: float = 0.0
    first_reward: Optional[str] = None
    last_reward: Optional[str] = None
    annualized_return: Optional[float] = None
    current_value_rewards_fiat: float = 0.0
    total_amount_human_readable: float = 0.0
    total_value_fiat: float = 0.0
    data: SRCRewardsData
