"""Pydantic models for the client IP API."""

from typing import Literal

from pydantic import BaseModel, Field

from clientip.core.resolver import Ambiguous, Resolved, ResolutionOutcome

OutcomeStatus = Literal["resolved", "ambiguous", "unresolved"]


class ClientIPResponse(BaseModel):
    """Resolution outcome of the current request."""

    status: OutcomeStatus = Field(description="Resolution outcome variant")
    ip: str | None = Field(default=None, description="Resolved client IP")
    source: str | None = Field(
        default=None, description="Header (or remote_addr) the IP came from"
    )
    headers: list[str] = Field(
        default_factory=list,
        description="Contributing headers when the outcome is ambiguous",
    )


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


def convert_outcome_to_response(outcome: ResolutionOutcome) -> ClientIPResponse:
    if isinstance(outcome, Resolved):
        return ClientIPResponse(
            status="resolved", ip=str(outcome.ip), source=outcome.source
        )
    if isinstance(outcome, Ambiguous):
        return ClientIPResponse(status="ambiguous", headers=list(outcome.headers))
    return ClientIPResponse(status="unresolved")
