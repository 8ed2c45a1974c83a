from fastapi import APIRouter

from api.api_v1.endpoints import (
    actions,
    events,
    healthz,
    nominators,
    stash,
    validators,
)

api_router = APIRouter()

# Group routes by adding tags parameter
api_router.include_router(validators.router, prefix="/validators", tags=["Validators"])
api_router.include_router(nominators.router, prefix="/nominators", tags=["Nominators"])
api_router.include_router(stash.router, prefix="/stash", tags=["Rewards"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(actions.router, prefix="/actions", tags=["User Actions"])
api_router.include_router(healthz.router, prefix="/healthz", tags=["Others"])
api_router.redirect_slashes = False
