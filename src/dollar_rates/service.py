"""Read-only HTTP API serving the cached rates."""

from __future__ import annotations

from fastapi import APIRouter, FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from dollar_rates.cache import SnapshotCache, Snapshot

API_PREFIX = "/api/v1"

router = APIRouter(prefix=API_PREFIX, tags=["rates"])


class RatesPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    eur: float
    cny: float
    try_: float = Field(alias="try")
    rub: float
    usd: float


class RatesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rates: RatesPayload
    updated_at: int = Field(alias="updatedAt")

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "RatesResponse":
        return cls(
            rates=RatesPayload.model_validate(snapshot.rates.to_dict()),
            updated_at=snapshot.updated_at,
        )


@router.get("/rates", response_model=RatesResponse)
async def get_rates(request: Request) -> RatesResponse:
    cache: SnapshotCache = request.app.state.cache
    snapshot = cache.read()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="rates not available yet")
    return RatesResponse.from_snapshot(snapshot)


def create_app(cache: SnapshotCache) -> FastAPI:
    """Build the API bound to ``cache``."""
    app = FastAPI(title="dollar-rates")
    app.state.cache = cache
    app.include_router(router)
    return app
