"""Edge routing decision made once per request, before any handler runs.

The decision depends only on the host classification, the path and query,
and whether the request carries a valid session. It never touches the
database; whether a tenant slug exists is the handler's business.
"""

from dataclasses import dataclass
from enum import Enum as PyEnum
from urllib.parse import urlencode

from app.routing.host_resolver import HostClassification, HostKind


class RouteAction(str, PyEnum):
    PASS = "pass"
    REDIRECT = "redirect"
    REWRITE = "rewrite"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteDecision:
    """What the edge gate does with a request. ``target`` is a path (+query)."""

    action: RouteAction
    target: str | None = None

    @classmethod
    def passthrough(cls) -> "RouteDecision":
        return cls(RouteAction.PASS)


@dataclass(frozen=True)
class RouterConfig:
    privileged_prefix: str = "/backoffice"
    login_path: str = "/backoffice/login"
    public_app_prefixes: tuple[str, ...] = (
        "/backoffice/login",
        "/api/auth",
        "/invitation/",
        "/onboarding/",
    )

    @classmethod
    def from_settings(cls, settings) -> "RouterConfig":
        prefix = "/" + settings.BACKOFFICE_PREFIX.strip("/")
        return cls(
            privileged_prefix=prefix,
            login_path=f"{prefix}/login",
            public_app_prefixes=(f"{prefix}/login", "/api/auth", "/invitation/", "/onboarding/"),
        )


def _under(path: str, prefix: str) -> bool:
    """Segment-aware prefix match: /backoffice matches /backoffice/x, not /backofficex."""
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def _with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def tenant_path(slug: str, path: str) -> str:
    """
    Prefix ``path`` with ``/slug`` unless it already is.

    Idempotent: tenant_path(s, tenant_path(s, p)) == tenant_path(s, p).
    """
    if not path.startswith("/"):
        path = "/" + path
    if _under(path, f"/{slug}"):
        return path
    if path == "/":
        return f"/{slug}"
    return f"/{slug}{path}"


def login_redirect(config: RouterConfig, path: str, query: str) -> str:
    callback = _with_query(path, query)
    return f"{config.login_path}?{urlencode({'callbackUrl': callback})}"


def _decide_app(path: str, query: str, has_session: bool, config: RouterConfig) -> RouteDecision:
    if any(_under(path, prefix) for prefix in config.public_app_prefixes):
        return RouteDecision.passthrough()

    if path == "/" or not _under(path, config.privileged_prefix):
        if has_session:
            return RouteDecision(RouteAction.REDIRECT, config.privileged_prefix)
        return RouteDecision(RouteAction.REDIRECT, login_redirect(config, path, query))

    if has_session:
        return RouteDecision.passthrough()
    return RouteDecision(RouteAction.REDIRECT, login_redirect(config, path, query))


def _decide_tenant(slug: str, path: str, query: str) -> RouteDecision:
    if not slug:
        return RouteDecision(RouteAction.NOT_FOUND)

    rewritten = tenant_path(slug, path)
    if rewritten == path:
        return RouteDecision.passthrough()
    return RouteDecision(RouteAction.REWRITE, _with_query(rewritten, query))


def decide_route(
    classification: HostClassification,
    path: str,
    query: str,
    has_session: bool,
    config: RouterConfig,
) -> RouteDecision:
    """
    Map (host class, path, session validity) to a routing action.

    Args:
        classification: Output of classify_host
        path: Request path
        query: Raw query string without the leading '?'
        has_session: Whether the request carries a valid session token
        config: Privileged prefix and public app paths

    Returns:
        RouteDecision; every input maps to exactly one action
    """
    path = path or "/"
    if classification.kind == HostKind.ROOT:
        return RouteDecision.passthrough()
    if classification.kind == HostKind.APP:
        return _decide_app(path, query, has_session, config)
    return _decide_tenant(classification.slug, path, query)
