"""Container file generation.

Uses the Jinja2 templates (``Dockerfile.j2``, ``dockerignore.j2``,
``docker-compose.yml.j2``) to containerise the generated API.  The compose
file is only written when the project has a database, since its sole job is
to run MongoDB next to the API.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from src.config import PackageManager, ScaffoldConfig
from src.utils import sanitize_name

from .server_gen import DEFAULT_PORT
from .templates import TemplateRenderer

# Per package manager: base image, manifest files to copy, corepack, install.
_DOCKER_INSTALL: dict[PackageManager, tuple[str, str, bool, str]] = {
    PackageManager.NPM: ("node:20-alpine", "package*.json", False, "npm install --omit=dev"),
    PackageManager.YARN: (
        "node:20-alpine",
        "package.json yarn.lock*",
        True,
        "yarn install --production",
    ),
    PackageManager.PNPM: (
        "node:20-alpine",
        "package.json pnpm-lock.yaml*",
        True,
        "pnpm install --prod",
    ),
    PackageManager.BUN: ("oven/bun:1-alpine", "package.json bun.lock*", False, "bun install --production"),
}


def build_docker_context(config: ScaffoldConfig) -> dict[str, Any]:
    """Build the template context shared by the container templates."""
    base_image, manifest_files, corepack, install = _DOCKER_INSTALL[config.package_manager]
    runtime = "bun" if config.package_manager is PackageManager.BUN else "node"
    return {
        "base_image": base_image,
        "manifest_files": manifest_files,
        "enable_corepack": corepack,
        "install_command": install,
        "start_command": [runtime, "src/server.js"],
        "default_port": DEFAULT_PORT,
        "compose": config.has_persistence,
        "compose_name": sanitize_name(config.project_name) or "api",
        "tests": config.init_test_boilerplate,
    }


class DockerGenerator:
    """Generates Dockerfile, .dockerignore and (with a database) a compose file."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(self, output_dir: Path, config: ScaffoldConfig) -> list[Path]:
        """Write the container files to *output_dir*.

        Args:
            output_dir: Project root directory.
            config: The resolved scaffold configuration.

        Returns:
            List of written file paths.
        """
        context = build_docker_context(config)
        written = [
            await self.renderer.render_to_file(
                "Dockerfile.j2", output_dir / "Dockerfile", context
            ),
            await self.renderer.render_to_file(
                "dockerignore.j2", output_dir / ".dockerignore", context
            ),
        ]
        if context["compose"]:
            written.append(
                await self.renderer.render_to_file(
                    "docker-compose.yml.j2", output_dir / "docker-compose.yml", context
                )
            )
        return written
