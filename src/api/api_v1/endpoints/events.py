from typing import List

from fastapi import APIRouter, HTTPException, Query

import schemas
from api.api_v1.deps import StakingEventsServiceDep

router = APIRouter()


@router.get("/{chain}/{stash}", response_model=schemas.StakingEvents)
def get_staking_events(
    service: StakingEventsServiceDep,
    stash: str,
    from_era: int = Query(ge=0),
    to_era: int = Query(ge=0),
    validators: List[str] = Query(default=[]),
):
    if from_era > to_era:
        raise HTTPException(status_code=400, detail="from_era must not exceed to_era")
    return service.get_staking_events(stash, validators, from_era, to_era)
