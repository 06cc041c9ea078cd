"""Client IP inspection endpoints."""

from fastapi import APIRouter

from .deps import ClientIPOutcomeDep
from .models import ClientIPResponse, HealthResponse, convert_outcome_to_response

router = APIRouter(tags=["client-ip"])


@router.get("/health")
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/client-ip")
async def client_ip(outcome: ClientIPOutcomeDep) -> ClientIPResponse:
    """Report how this request's client IP was resolved.

    Raw header values are never echoed back, even when ambiguous.
    """
    return convert_outcome_to_response(outcome)
