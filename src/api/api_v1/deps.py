from typing import Annotated, Dict, Optional

from fastapi import Depends, HTTPException, Request

from core import constants
from core.config import Settings
from core.db import RecordStore
from core.era_cache import CurrentEraCache
from core.snapshot_cache import SnapshotCache
from services.nominator_service import NominatorService
from services.price_cache import DailyPriceCache
from services.reward_report_service import RewardReportService
from services.reward_service import RewardService
from services.staking_events_service import StakingEventsService
from services.user_action_service import UserActionService
from services.validator_service import ValidatorService


class AppContext:
    """Process-wide components, built once at startup."""

    def __init__(
        self,
        settings: Settings,
        stores: Dict[str, RecordStore],
        era_cache: Optional[CurrentEraCache] = None,
        snapshot_cache: Optional[SnapshotCache] = None,
        price_cache: Optional[DailyPriceCache] = None,
        reward_report_service: Optional[RewardReportService] = None,
    ):
        self.settings = settings
        self.stores = stores
        self.era_cache = era_cache or CurrentEraCache()
        self.snapshot_cache = snapshot_cache or SnapshotCache(settings.SNAPSHOT_CACHE_DIR)
        self.price_cache = price_cache or DailyPriceCache(
            maxsize=settings.PRICE_CACHE_MAX_DAYS, ttl=settings.PRICE_CACHE_TTL_SECONDS
        )
        self.reward_report_service = reward_report_service or RewardReportService(settings)

    def store(self, chain: str) -> RecordStore:
        try:
            return self.stores[chain]
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unsupported chain: {chain}")


def get_context(request: Request) -> AppContext:
    return request.app.state.context


ContextDep = Annotated[AppContext, Depends(get_context)]


def get_chain(chain: str) -> str:
    try:
        return constants.CHAIN_PATHS[chain.lower()]
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unsupported chain: {chain}")


ChainDep = Annotated[str, Depends(get_chain)]


def get_validator_service(ctx: ContextDep, chain: ChainDep) -> ValidatorService:
    return ValidatorService(
        ctx.store(chain),
        chain,
        era_cache=ctx.era_cache,
        snapshot_cache=ctx.snapshot_cache,
    )


def get_reward_service(ctx: ContextDep, chain: ChainDep) -> RewardService:
    return RewardService(ctx.store(chain), ctx.price_cache)


def get_nominator_service(ctx: ContextDep, chain: ChainDep) -> NominatorService:
    return NominatorService(ctx.store(chain), get_reward_service(ctx, chain))


def get_staking_events_service(ctx: ContextDep, chain: ChainDep) -> StakingEventsService:
    return StakingEventsService(ctx.store(chain), get_reward_service(ctx, chain))


def get_user_action_service(ctx: ContextDep, chain: ChainDep) -> UserActionService:
    return UserActionService(ctx.store(chain), chain)


def get_reward_report_service(ctx: ContextDep) -> RewardReportService:
    return ctx.reward_report_service


ValidatorServiceDep = Annotated[ValidatorService, Depends(get_validator_service)]
RewardServiceDep = Annotated[RewardService, Depends(get_reward_service)]
NominatorServiceDep = Annotated[NominatorService, Depends(get_nominator_service)]
StakingEventsServiceDep = Annotated[
    StakingEventsService, Depends(get_staking_events_service)
]
UserActionServiceDep = Annotated[UserActionService, Depends(get_user_action_service)]
RewardReportServiceDep = Annotated[
    RewardReportService, Depends(get_reward_report_service)
]
