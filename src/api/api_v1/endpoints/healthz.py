from typing import Dict

from fastapi import APIRouter, status
from pydantic import BaseModel

from api.api_v1.deps import ContextDep

router = APIRouter()


class ChainStatus(BaseModel):
    connected: bool
    era: int


class HealthCheckResponse(BaseModel):
    status: str
    chains: Dict[str, ChainStatus] = {}


@router.get("/", response_model=HealthCheckResponse, status_code=status.HTTP_200_OK)
async def health_check(ctx: ContextDep):
    return HealthCheckResponse(
        status="ok",
        chains={
            chain: ChainStatus(
                connected=store.is_connected, era=ctx.era_cache.get(chain)
            )
            for chain, store in ctx.stores.items()
        },
    )
