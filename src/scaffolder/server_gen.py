"""Bootstrap generation (``src/server.js``).

The rendered entry point loads ``.env`` first (when selected), imports the
application lazily, and then either binds the listener straight away or
only after the database connection succeeds.
"""

from __future__ import annotations

from typing import Any

from src.config import Feature, ScaffoldConfig

from .templates import TemplateRenderer

SERVER_TEMPLATE = "server.js.j2"

DEFAULT_PORT = 8000
SHUTDOWN_TIMEOUT_MS = 10_000


def build_server_context(config: ScaffoldConfig) -> dict[str, Any]:
    """Build the Jinja2 context for ``server.js.j2``."""
    return {
        "dotenv": config.enabled(Feature.ENV_LOADING),
        "persistence": config.has_persistence,
        "default_port": DEFAULT_PORT,
        "shutdown_timeout_ms": SHUTDOWN_TIMEOUT_MS,
    }


class BootstrapGenerator:
    """Renders ``src/server.js`` for a given ``ScaffoldConfig``."""

    output_path = "src/server.js"

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def render(self, config: ScaffoldConfig) -> str:
        """Return the full text of the process entry point."""
        return self.renderer.render(SERVER_TEMPLATE, build_server_context(config))
