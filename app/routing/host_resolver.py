"""Classify an incoming host header as root, app or tenant.

Pure functions only: no I/O, no framework request objects, never raises.
"""

import re
from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Mapping
from urllib.parse import urlsplit

# DNS label that is also a URL-safe tenant slug
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 63

# First-level paths the app serves itself; never tenant slugs
APP_PATH_LABELS = frozenset({"api", "health", "docs", "redoc", "openapi", "invitation", "onboarding"})


class HostKind(str, PyEnum):
    ROOT = "root"
    APP = "app"
    TENANT = "tenant"


@dataclass(frozen=True)
class HostClassification:
    """
    Tagged result of host classification.

    ``slug`` is only meaningful for TENANT. An empty slug is the
    "no tenant" fallback used for unknown hosts.
    """

    kind: HostKind
    slug: str = ""

    @property
    def has_tenant(self) -> bool:
        return self.kind == HostKind.TENANT and bool(self.slug)

    @classmethod
    def root(cls) -> "HostClassification":
        return cls(HostKind.ROOT)

    @classmethod
    def app(cls) -> "HostClassification":
        return cls(HostKind.APP)

    @classmethod
    def tenant(cls, slug: str = "") -> "HostClassification":
        return cls(HostKind.TENANT, slug)


@dataclass(frozen=True)
class HostConfig:
    base_domain: str = "viw-carta.com"
    app_subdomain: str = "app"
    local_dev_domain: str = "localhost"
    backoffice_label: str = "backoffice"

    @classmethod
    def from_settings(cls, settings) -> "HostConfig":
        return cls(
            base_domain=normalize_host(settings.BASE_DOMAIN),
            app_subdomain=settings.APP_SUBDOMAIN.strip().lower(),
            local_dev_domain=normalize_host(settings.LOCAL_DEV_DOMAIN),
            backoffice_label=settings.BACKOFFICE_PREFIX.strip("/").split("/")[0].lower(),
        )

    @property
    def root_hosts(self) -> frozenset[str]:
        return frozenset({self.base_domain, f"www.{self.base_domain}"})

    @property
    def app_hosts(self) -> frozenset[str]:
        return frozenset(
            {
                f"{self.app_subdomain}.{self.base_domain}",
                f"{self.app_subdomain}.{self.local_dev_domain}",
                self.local_dev_domain,
            }
        )

    @property
    def reserved_labels(self) -> frozenset[str]:
        return frozenset({"www", self.app_subdomain, self.backoffice_label}) | APP_PATH_LABELS


def resolve_host_header(headers: Mapping[str, str]) -> str:
    """Pick the first X-Forwarded-Host entry, falling back to Host."""
    forwarded = (headers.get("x-forwarded-host") or "").split(",")[0].strip()
    return forwarded or headers.get("host") or ""


def normalize_host(host: str | None) -> str:
    """Lowercase the host and strip scheme, path, port and trailing dot."""
    normalized = (host or "").split(",")[0].strip().lower()
    if not normalized:
        return ""

    if "://" in normalized:
        try:
            normalized = urlsplit(normalized).hostname or ""
        except ValueError:
            return ""
        return normalized.rstrip(".")

    normalized = normalized.split("/")[0].strip()
    if normalized.startswith("["):
        # IPv6 literal, optionally with a port: [::1]:8000
        return normalized[1:].split("]")[0]
    if ":" in normalized:
        normalized = normalized.split(":")[0].strip()
    return normalized.rstrip(".")


def is_valid_slug(value: str) -> bool:
    return 0 < len(value) <= MAX_SLUG_LENGTH and bool(SLUG_PATTERN.match(value))


def _tenant_label(host: str, domain: str, config: HostConfig) -> str | None:
    """Leftmost label of a subdomain of ``domain``; None if not a subdomain."""
    suffix = f".{domain}"
    if not domain or not host.endswith(suffix):
        return None
    label = host[: -len(suffix)].split(".")[0]
    if label in config.reserved_labels or not is_valid_slug(label):
        return ""
    return label


def classify_host(host: str | None, config: HostConfig) -> HostClassification:
    """
    Classify a raw host header value.

    - ROOT: the bare marketing domain or its www alias
    - APP: the application subdomain, or its local development equivalent
    - TENANT(slug): any other subdomain of the base or local domain
    - TENANT(""): anything else (empty, IP literals, foreign domains)
    """
    normalized = normalize_host(host)
    if not normalized:
        return HostClassification.tenant()

    if normalized in config.root_hosts:
        return HostClassification.root()

    if normalized in config.app_hosts:
        return HostClassification.app()

    for domain in (config.base_domain, config.local_dev_domain):
        label = _tenant_label(normalized, domain, config)
        if label is not None:
            return HostClassification.tenant(label)

    return HostClassification.tenant()
