import logging

from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.core.security import needs_refresh, refresh_session_token, validate_session_token
from app.core.session_cookie import response_sets_session_cookie, set_session_cookie
from app.routing.host_resolver import HostConfig, classify_host, resolve_host_header
from app.routing.request_router import RouteAction, RouterConfig, decide_route

logger = logging.getLogger(__name__)

# Paths the router never sees: API handlers authorize themselves
EXCLUDED_PREFIXES = ("/api/", "/health", "/docs", "/redoc", "/openapi.json")


def _session_from_cookie(request):
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        return validate_session_token(token)
    except UnauthorizedException:
        return None


class EdgeGateMiddleware(BaseHTTPMiddleware):
    """
    Applies the host-based routing decision before any page handler runs.

    Also slides the session window: a request carrying a valid session
    cookie older than SESSION_UPDATE_AGE_SECONDS gets a fresh cookie on
    its response.
    """

    def __init__(self, app, host_config: HostConfig | None = None, router_config: RouterConfig | None = None):
        super().__init__(app)
        self.host_config = host_config or HostConfig.from_settings(settings)
        self.router_config = router_config or RouterConfig.from_settings(settings)

    async def dispatch(self, request, call_next):
        identity = _session_from_cookie(request)
        path = request.url.path

        if not path.startswith(EXCLUDED_PREFIXES):
            classification = classify_host(resolve_host_header(request.headers), self.host_config)
            decision = decide_route(
                classification,
                path,
                request.url.query,
                identity is not None,
                self.router_config,
            )

            if decision.action == RouteAction.REDIRECT:
                logger.debug("Redirect %s%s -> %s", classification.kind.value, path, decision.target)
                return RedirectResponse(decision.target, status_code=307)

            if decision.action == RouteAction.NOT_FOUND:
                logger.debug("No tenant for host, path=%s", path)
                return JSONResponse(status_code=404, content={"detail": "Not found", "code": "not_found"})

            if decision.action == RouteAction.REWRITE:
                logger.debug("Rewrite %s -> %s for tenant %s", path, decision.target, classification.slug)
                new_path = decision.target.split("?", 1)[0]
                request.scope["path"] = new_path
                request.scope["raw_path"] = new_path.encode("utf-8")

        response = await call_next(request)

        if identity is not None and needs_refresh(identity) and not response_sets_session_cookie(response):
            set_session_cookie(response, refresh_session_token(identity), request)

        return response
