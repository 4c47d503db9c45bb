"""
HTTP middleware.
"""

import asyncio

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


class ResponseDelayMiddleware(BaseHTTPMiddleware):
    """
    Hold every request for a fixed time before handling it.

    Lets frontend developers see loading states against a local API.
    A delay of 0 disables it.
    """

    def __init__(self, app: ASGIApp, delay_ms: int = 0):
        super().__init__(app)
        self.delay_ms = delay_ms

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)
        return await call_next(request)
