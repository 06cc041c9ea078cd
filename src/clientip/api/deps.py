"""Centralized FastAPI dependency type aliases."""

from typing import Annotated

from fastapi import Depends

from clientip.core.resolver import ResolutionOutcome
from clientip.infra.real_ip import get_client_ip_outcome

ClientIPOutcomeDep = Annotated[ResolutionOutcome, Depends(get_client_ip_outcome)]
