from fastapi import APIRouter

import schemas
from api.api_v1.deps import ContextDep, UserActionServiceDep
from core import constants
from services.user_action_service import UserActionService

router = APIRouter()


@router.post("/newsletter", response_model=dict)
def subscribe_newsletter(ctx: ContextDep, request: schemas.NewsletterSubscriberRequest):
    service = UserActionService(
        ctx.store(constants.NEWSLETTER_CHAIN), constants.NEWSLETTER_CHAIN
    )
    service.subscribe_newsletter(request.email)
    return {"status": "ok"}


@router.post("/{chain}/nominate", response_model=dict)
def nominate(service: UserActionServiceDep, request: schemas.NominationRequest):
    tag = service.insert_nomination_action(
        request.stash, request.validators, request.amount, request.strategy
    )
    return {"tag": tag}


@router.post("/{chain}/nominated", response_model=dict)
def nominated(service: UserActionServiceDep, request: schemas.NominationResultRequest):
    service.insert_nomination_result(request.tag, request.extrinsic_hash, request.ref_key)
    return {"status": "ok"}


@router.get("/{chain}/nominate/{stash}", response_model=schemas.NominationRecordInfo)
def get_nomination(service: UserActionServiceDep, stash: str):
    record = service.get_nomination_record(stash)
    return schemas.NominationRecordInfo.model_validate(record, from_attributes=True)
