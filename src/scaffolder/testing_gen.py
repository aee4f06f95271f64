"""Smoke-test generation for the generated project.

The Jest test asserts exactly what the bundled healthcheck controller
returns, so the expected strings below must track
``boilerplate/src/controllers/healthcheck.controller.js``.
"""

from __future__ import annotations

from pathlib import Path

from .app_gen import HEALTHCHECK_ROUTER
from .templates import TemplateRenderer

HEALTHCHECK_MESSAGE = "App is running smoothly"
ERROR_TRIGGER_MESSAGE = "This is a custom error thrown for testing purposes."


class SmokeTestGenerator:
    """Writes ``tests/healthcheck.test.js``."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, project_root: Path) -> list[Path]:
        context = {
            "healthcheck_path": HEALTHCHECK_ROUTER.mount_path,
            "healthcheck_message": HEALTHCHECK_MESSAGE,
            "error_message": ERROR_TRIGGER_MESSAGE,
        }
        path = await self.renderer.render_to_file(
            "tests/healthcheck.test.js.j2",
            project_root / "tests" / "healthcheck.test.js",
            context,
        )
        return [path]
