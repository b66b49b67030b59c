"""Request authorization.

Every request must pass a credential check before routing. The check is a
plain predicate over the request headers so a stronger scheme can replace the
static shared secret without touching any handler.

Rejected requests are answered with the regular JSON error body and HTTP 200,
matching the rest of the API's error responses.
"""

import hmac
from typing import Callable, Mapping

import structlog
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from errors import Unauthorized

logger = structlog.get_logger("auth")

CredentialCheck = Callable[[Mapping[str, str]], bool]


def static_token_check(token: str) -> CredentialCheck:
    """Accept requests whose ``authorization`` header equals ``token`` exactly."""
    expected = token.encode("utf-8")

    def check(headers: Mapping[str, str]) -> bool:
        presented = headers.get("authorization")
        if not presented:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), expected)

    return check


class AuthorizationMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, check: CredentialCheck):
        super().__init__(app)
        self.check = check

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if not self.check(request.headers):
            logger.warning(
                "auth.rejected",
                method=request.method,
                path=request.url.path,
                header_present="authorization" in request.headers,
            )
            return JSONResponse(Unauthorized().to_body())
        return await call_next(request)
