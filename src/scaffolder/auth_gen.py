"""Authentication boilerplate generation.

Renders the ``templates/auth/`` tree (controller, JWT middleware, routes,
hashing and token helpers) into the project.  The user model is only
rendered when the project has a database; otherwise the controller keeps
users in memory.  Two keys are appended to ``.env`` and ``.env.example``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from src.config import ScaffoldConfig

from .templates import TemplateRenderer

DEFAULT_SALT_ROUNDS = 10
TOKEN_TTL = "1d"

# Exactly these lines are appended to each env file.
AUTH_ENV_LINES: tuple[str, ...] = (
    "JWT_SECRET=change-me-to-a-long-random-string",
    f"BCRYPT_SALT_ROUNDS={DEFAULT_SALT_ROUNDS}",
)


class AuthGenerator:
    """Adds login/register/profile endpoints to a generated project."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, project_root: Path, config: ScaffoldConfig) -> list[Path]:
        """Render the auth sources and extend the env files.

        Returns:
            List of written source file paths.
        """
        context: dict[str, Any] = {
            "persistence": config.has_persistence,
            "default_salt_rounds": DEFAULT_SALT_ROUNDS,
            "token_ttl": TOKEN_TTL,
        }
        skip = [] if config.has_persistence else ["models/"]
        written = await self.renderer.render_tree(
            "auth", project_root, context, skip_patterns=skip
        )
        for env_name in (".env", ".env.example"):
            await asyncio.to_thread(append_env_lines, project_root / env_name, AUTH_ENV_LINES)
        return written


def append_env_lines(path: Path, lines: tuple[str, ...]) -> None:
    """Append *lines* to an env file, starting on a fresh line."""
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    if existing and not existing.endswith("\n"):
        existing += "\n"
    path.write_text(existing + "\n".join(lines) + "\n", encoding="utf-8")
