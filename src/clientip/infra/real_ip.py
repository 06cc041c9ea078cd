"""FastAPI / ASGI integration for client IP resolution.

Deployment chain: Client -> CDN edge -> load balancer -> FastAPI.

``request.client.host`` is the nearest proxy, so the real client IP has
to come from proxy headers, which the client can also forge.
``ClientIPMiddleware`` resolves once per request, tags the active span
and leaves the outcome on ``request.state`` for the dependencies below::

    real_ip: str | None = Depends(get_real_ip)
"""

from __future__ import annotations

import logging

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from clientip.configs.system import ClientIPConfig
from clientip.core.resolver import ClientIPResolver, Resolved, ResolutionOutcome
from clientip.core.tags import apply_outcome

from .logging import client_ip_context
from .telemetry import current_span_target

logger = logging.getLogger(__name__)

STATE_OUTCOME_KEY = "client_ip_outcome"
STATE_RESOLVER_KEY = "client_ip_resolver"


class ClientIPMiddleware:
    """Resolve the client IP of every HTTP request and tag its span."""

    def __init__(
        self,
        app: ASGIApp,
        resolver: ClientIPResolver | None = None,
        config: ClientIPConfig | None = None,
    ) -> None:
        self.app = app
        self.resolver = resolver if resolver is not None else ClientIPResolver(config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        client = scope.get("client")
        remote_addr = client[0] if client else None
        outcome = self.resolver.resolve(scope.get("headers"), remote_addr)
        apply_outcome(current_span_target(), outcome)

        scope.setdefault("state", {})[STATE_OUTCOME_KEY] = outcome
        resolved_ip = str(outcome.ip) if isinstance(outcome, Resolved) else None
        with client_ip_context(resolved_ip):
            await self.app(scope, receive, send)


def _request_resolver(request: Request) -> ClientIPResolver:
    resolver = getattr(request.app.state, STATE_RESOLVER_KEY, None)
    if resolver is None:
        resolver = ClientIPResolver()
    return resolver


def get_client_ip_outcome(request: Request) -> ResolutionOutcome:
    """FastAPI dependency returning this request's resolution outcome.

    Falls back to resolving on the spot (without tagging) when the
    middleware is not installed.
    """
    outcome = getattr(request.state, STATE_OUTCOME_KEY, None)
    if outcome is not None:
        return outcome

    logger.debug("ClientIPMiddleware not installed; resolving in dependency.")
    remote_addr = request.client.host if request.client else None
    return _request_resolver(request).resolve(request.headers.raw, remote_addr)


def get_real_ip(request: Request) -> str | None:
    """The resolved client IP as text, or ``None`` without a confident answer."""
    outcome = get_client_ip_outcome(request)
    if isinstance(outcome, Resolved):
        return str(outcome.ip)
    return None
