"""Auth endpoints that drive a strategy through its lifecycle hooks."""

import logging
from typing import Callable
from urllib.parse import urlparse

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from ..models import ErrorDetail, Failure
from .config import StrategyConfig
from .conn import Conn
from .providers.base import Strategy

logger = logging.getLogger(__name__)


def _get_scheme(request: Request, config: StrategyConfig) -> str:
    """Get the scheme the browser used to reach us."""
    if config.base_url:
        return urlparse(config.base_url).scheme
    return request.headers.get("x-forwarded-proto", request.url.scheme)


def _get_base_url(request: Request, config: StrategyConfig) -> str:
    """Get the base URL for OAuth callbacks."""
    if config.base_url:
        return config.base_url.rstrip("/")

    # Auto-detect from request
    scheme = _get_scheme(request, config)
    host = request.headers.get("x-forwarded-host", request.url.netloc)
    return f"{scheme}://{host}"


def _build_conn(request: Request, strategy: Strategy, config: StrategyConfig) -> Conn:
    base_url = _get_base_url(request, config)
    return Conn(
        params=dict(request.query_params),
        cookies=dict(request.cookies),
        callback_url=f"{base_url}/auth/{strategy.name}/callback",
    )


def _apply_cookies(response: Response, conn: Conn, secure: bool) -> Response:
    """Copy cookie changes recorded on the conn onto the response."""
    for name in conn.deleted_cookies:
        response.delete_cookie(name)
    for name, value in conn.resp_cookies.items():
        response.set_cookie(name, value, httponly=True, samesite="lax", secure=secure)
    return response


def create_router(get_strategy: Callable[[], Strategy]) -> APIRouter:
    """
    Create the auth router.

    Args:
        get_strategy: Returns the strategy serving /auth/<name>

    Returns:
        Router with the request and callback endpoints
    """
    router = APIRouter(tags=["Auth"])

    def _resolve(name: str) -> Strategy:
        strategy = get_strategy()

        if not strategy.config.enabled or name != strategy.name:
            raise HTTPException(status_code=404, detail=f"Auth provider '{name}' not enabled")

        return strategy

    @router.get("/auth/{name}")
    async def auth_request(name: str, request: Request):
        """
        Start authentication.

        Redirects to the provider's authorization page.
        """
        strategy = _resolve(name)
        conn = strategy.on_begin_auth(_build_conn(request, strategy, strategy.config))

        if conn.redirect_to is None:
            raise HTTPException(status_code=500, detail="Strategy did not redirect")

        response = RedirectResponse(url=conn.redirect_to, status_code=302)
        secure = _get_scheme(request, strategy.config) == "https"
        return _apply_cookies(response, conn, secure=secure)

    @router.get("/auth/{name}/callback")
    async def auth_callback(name: str, request: Request):
        """
        Handle the provider callback.

        Returns the normalized auth result, or 400 with the collected errors.
        """
        strategy = _resolve(name)
        conn = await strategy.on_callback(_build_conn(request, strategy, strategy.config))

        if conn.failed:
            failure = Failure(
                provider=strategy.name,
                errors=[ErrorDetail(kind=e.kind, message=e.message) for e in conn.errors],
            )
            response = JSONResponse(status_code=400, content=failure.model_dump())
        else:
            auth = strategy.auth(conn)
            logger.info(f"Authenticated {auth.provider}:{auth.uid}")
            response = JSONResponse(content=auth.model_dump())

        conn = strategy.on_cleanup(conn)

        secure = _get_scheme(request, strategy.config) == "https"
        return _apply_cookies(response, conn, secure=secure)

    return router
