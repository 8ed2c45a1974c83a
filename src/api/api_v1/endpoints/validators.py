import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

import schemas
from api.api_v1.deps import ValidatorServiceDep
from core import constants

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{chain}", response_model=List[schemas.ValidatorNominationInfo])
def get_validators(
    service: ValidatorServiceDep,
    era: Optional[int] = Query(default=None, ge=0),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=constants.DEFAULT_PAGE_SIZE, ge=1, le=constants.MAX_PAGE_SIZE),
    apy_min: float = Query(default=0.0, ge=0),
    apy_max: float = Query(default=1.0, ge=0),
    commission_min: float = Query(default=0.0, ge=0, le=1),
    commission_max: float = Query(default=1.0, ge=0, le=1),
    has_verified_identity: bool = False,
    only_program_members: bool = False,
):
    if apy_min > apy_max:
        raise HTTPException(status_code=400, detail="apy_min must not exceed apy_max")
    if commission_min > commission_max:
        raise HTTPException(
            status_code=400, detail="commission_min must not exceed commission_max"
        )

    options = schemas.ValidatorListOptions(
        page=page,
        size=size,
        apy_min=apy_min,
        apy_max=apy_max,
        commission_min=commission_min,
        commission_max=commission_max,
        has_verified_identity=has_verified_identity,
        only_program_members=only_program_members,
    )

    if era is not None:
        return service.get_all_validator_info_of_era(era, options)

    active_era = service.get_active_era()
    validators = service.get_all_validator_info_of_era(active_era, options)
    if not validators and active_era > 0:
        # ingestion of a just started era may still be running
        logger.info("No validators in era %s yet, using era %s", active_era, active_era - 1)
        validators = service.get_all_validator_info_of_era(active_era - 1, options)
    return validators


@router.get("/{chain}/{stash}/trend", response_model=schemas.ValidatorNominationTrend)
def get_validator_trend(service: ValidatorServiceDep, stash: str):
    return service.get_validator(stash)


@router.get("/{chain}/{stash}/unclaimedEras", response_model=List[int])
def get_validator_unclaimed_eras(service: ValidatorServiceDep, stash: str):
    return service.get_validator_unclaimed_eras(stash)


@router.get("/{chain}/{stash}/slashes", response_model=List[schemas.ValidatorSlash])
def get_validator_slashes(service: ValidatorServiceDep, stash: str):
    return service.get_validator_slashes(stash)
