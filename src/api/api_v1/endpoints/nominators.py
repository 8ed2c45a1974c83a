from typing import List

from fastapi import APIRouter

import schemas
from api.api_v1.deps import NominatorServiceDep, ValidatorServiceDep

router = APIRouter()


@router.get("/{chain}/{stash}", response_model=schemas.NominatorNomination)
def get_nominator(service: NominatorServiceDep, stash: str):
    return service.get_nominator_info(stash)


@router.get(
    "/{chain}/{stash}/nominated",
    response_model=List[schemas.ValidatorNominationInfo],
)
def get_nominated_validators(service: ValidatorServiceDep, stash: str):
    return service.get_nominated_validators(stash)
