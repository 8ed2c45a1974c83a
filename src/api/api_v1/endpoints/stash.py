from typing import Optional

from fastapi import APIRouter, Query

import schemas
from api.api_v1.deps import ChainDep, RewardReportServiceDep, RewardServiceDep
from core import constants

router = APIRouter()


@router.get("/{chain}/{stash}/rewards", response_model=schemas.StashRewards)
def get_stash_rewards(service: RewardServiceDep, stash: str):
    return service.get_stash_rewards(stash)


@router.get("/{chain}/{stash}/rewards/collector", response_model=schemas.StashRewards)
async def get_stash_rewards_collector(
    service: RewardReportServiceDep,
    chain: ChainDep,
    stash: str,
    start: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    end: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    currency: str = constants.REWARD_REPORT_DEFAULT_CURRENCY,
    price_data: bool = True,
    start_balance: float = Query(default=0.0, ge=0),
):
    return await service.generate(
        stash,
        network=constants.CHAIN_NETWORK_NAMES[chain],
        start=start,
        end=end,
        currency=currency,
        price_data=price_data,
        start_balance=start_balance,
    )
