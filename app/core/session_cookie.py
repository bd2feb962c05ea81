from typing import Any

from fastapi import Request, Response

from app.config import settings
from app.routing.host_resolver import normalize_host, resolve_host_header

_LOCAL_HOSTS = {"", "localhost", "127.0.0.1", "::1"}


def _is_local_host(host: str) -> bool:
    return host in _LOCAL_HOSTS or host.endswith(f".{settings.LOCAL_DEV_DOMAIN}")


def build_session_cookie_options(request: Request | None = None) -> dict[str, Any]:
    secure = settings.SESSION_COOKIE_SECURE
    if request is not None and secure:
        host = normalize_host(resolve_host_header(request.headers))
        # Local development runs over plain http
        if _is_local_host(host):
            secure = False

    return {
        "domain": settings.SESSION_COOKIE_DOMAIN,
        "httponly": True,
        "samesite": "lax",
        "path": "/",
        "secure": secure,
    }


def set_session_cookie(response: Response, token: str, request: Request | None = None) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        **build_session_cookie_options(request),
    )


def clear_session_cookie(response: Response, request: Request | None = None) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        **build_session_cookie_options(request),
    )


def response_sets_session_cookie(response: Response) -> bool:
    """Whether the handler already set or cleared the session cookie."""
    prefix = f"{settings.SESSION_COOKIE_NAME}="
    return any(value.startswith(prefix) for value in response.headers.getlist("set-cookie"))
