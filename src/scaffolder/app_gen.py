"""Composition-root generation (``src/app.js``).

Renders the Express application wiring file from ``templates/app.js.j2``.
Every optional middleware is gated by its feature flag both at the import
site and at the registration site, so the output never imports something it
does not use.  Registration order is fixed by the template and listed in
``MIDDLEWARE_ORDER``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from src.config import Feature, ScaffoldConfig

from .templates import TemplateRenderer

APP_TEMPLATE = "app.js.j2"

BODY_SIZE_LIMIT = "16kb"
RATE_LIMIT_WINDOW_EXPR = "15 * 60 * 1000"
RATE_LIMIT_MAX = 100

# Relative order of every registration the composition root can emit.
MIDDLEWARE_ORDER: tuple[str, ...] = (
    "secure-headers",
    "rate-limiter",
    "request-logger",
    "cross-origin",
    "json",
    "urlencoded",
    "static",
    "cookie-parser",
    "routers",
    "error-handler",
)

_REGISTRATION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("secure-headers", re.compile(r"^app\.use\(helmet\(\)\);")),
    ("rate-limiter", re.compile(r'^app\.use\("/api", limiter\);')),
    ("request-logger", re.compile(r"^app\.use\(pinoHttp\(")),
    ("cross-origin", re.compile(r"^app\.use\(cors\(")),
    ("json", re.compile(r"^app\.use\(express\.json\(")),
    ("urlencoded", re.compile(r"^app\.use\(express\.urlencoded\(")),
    ("static", re.compile(r"^app\.use\(express\.static\(")),
    ("cookie-parser", re.compile(r"^app\.use\(cookieParser\(\)\);")),
    ("routers", re.compile(r'^app\.use\("/api/v\d+/[^"]*", \w+Router\);')),
    ("error-handler", re.compile(r"^app\.use\(errorHandler\);")),
)


@dataclass(frozen=True)
class Router:
    """A router module mounted by the composition root."""

    identifier: str
    module: str
    mount_path: str


HEALTHCHECK_ROUTER = Router(
    identifier="healthcheckRouter",
    module="#routes/healthcheck.routes.js",
    mount_path="/api/v1/healthcheck",
)

AUTH_ROUTER = Router(
    identifier="authRouter",
    module="#routes/auth.routes.js",
    mount_path="/api/v1/auth",
)


def routers_for(config: ScaffoldConfig) -> list[Router]:
    """Routers to import and mount, in a stable order.

    The healthcheck router is always first; optional routers are appended
    after it so their position never depends on other toggles.
    """
    routers = [HEALTHCHECK_ROUTER]
    if config.init_auth_boilerplate:
        routers.append(AUTH_ROUTER)
    return routers


def build_app_context(config: ScaffoldConfig) -> dict[str, Any]:
    """Build the Jinja2 context for ``app.js.j2``."""
    logging_on = config.enabled(Feature.REQUEST_LOGGING)
    return {
        "cors": config.enabled(Feature.CROSS_ORIGIN),
        "cookie_parser": config.enabled(Feature.COOKIES),
        "helmet": config.enabled(Feature.SECURE_HEADERS),
        "pino_http": logging_on,
        "pretty_logging": logging_on and config.pretty_dev_logging,
        "rate_limit": config.enabled(Feature.RATE_LIMITING),
        "rate_limit_window_expr": RATE_LIMIT_WINDOW_EXPR,
        "rate_limit_max": RATE_LIMIT_MAX,
        "body_limit": BODY_SIZE_LIMIT,
        "routers": routers_for(config),
    }


class CompositionRootGenerator:
    """Renders ``src/app.js`` for a given ``ScaffoldConfig``."""

    output_path = "src/app.js"

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def render(self, config: ScaffoldConfig) -> str:
        """Return the full text of the composition root."""
        return self.renderer.render(APP_TEMPLATE, build_app_context(config))


def middleware_sequence(app_source: str) -> list[str]:
    """Extract the registered middleware names from rendered ``app.js``.

    Consecutive router mounts collapse into a single ``"routers"`` entry.
    Unrecognised ``app.use`` lines raise ``ValueError``.
    """
    sequence: list[str] = []
    for line in app_source.splitlines():
        if not line.startswith("app.use("):
            continue
        for name, pattern in _REGISTRATION_PATTERNS:
            if pattern.match(line):
                break
        else:
            raise ValueError(f"Unrecognised middleware registration: {line!r}")
        if sequence and sequence[-1] == name == "routers":
            continue
        sequence.append(name)
    return sequence
