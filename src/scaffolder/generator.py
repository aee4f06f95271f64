"""Main scaffolding orchestrator.

Takes a ``ScaffoldConfig`` and generates a complete Express API project:
copies the static boilerplate, renders ``src/app.js`` and ``src/server.js``
for the selected features, writes env files and ``package.json``, adds the
optional auth/test/container blocks, then drives the package manager and
git.

Steps run strictly one after another.  External commands are best effort:
a failed install or commit is reported but never rolls back written files.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.config import Feature, RunSettings, ScaffoldConfig
from src.utils import print_step, write_text

from .app_gen import CompositionRootGenerator
from .assets import PERSISTENCE_ASSET_DIRS, StaticAssetCopier
from .auth_gen import AuthGenerator
from .docker_gen import DockerGenerator
from .errors import ProjectExistsError
from .installer import GitInitializer, PackageInstaller
from .manifest_gen import ManifestBuilder
from .server_gen import DEFAULT_PORT, BootstrapGenerator
from .templates import TemplateRenderer
from .testing_gen import SmokeTestGenerator


@dataclass
class GenerationResult:
    """What a generation run produced."""

    project_path: Path
    files: list[Path] = field(default_factory=list)
    install_ok: bool | None = None
    git_ok: bool | None = None
    failed_commands: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """``True`` when no external step failed."""
        return self.install_ok is not False and self.git_ok is not False


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ScaffoldConfig``, generates a project directory containing:
    - ``src/`` boilerplate (controllers, routes, middlewares, utils, db)
    - a tailored ``src/app.js`` and ``src/server.js``
    - ``.env`` / ``.env.example`` and ``package.json``
    - optional auth endpoints, Jest smoke test, Dockerfile and compose file
    - optionally installed dependencies and an initial git commit
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        settings: RunSettings | None = None,
        copier: StaticAssetCopier | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or RunSettings()
        self.renderer = TemplateRenderer(self.settings.template_dir)
        self.copier = copier or StaticAssetCopier()
        self.app_gen = CompositionRootGenerator(self.renderer)
        self.server_gen = BootstrapGenerator(self.renderer)
        self.manifest_builder = ManifestBuilder()
        self.auth_gen = AuthGenerator(self.renderer)
        self.test_gen = SmokeTestGenerator(self.renderer)
        self.docker_gen = DockerGenerator(self.renderer)
        self.installer = PackageInstaller(config.package_manager)
        self.git = GitInitializer()

    # -- Public API --------------------------------------------------------

    def target_path(self, output_dir: str | Path | None = None) -> Path:
        """Directory the project will be written to."""
        base = Path(output_dir) if output_dir is not None else self.settings.output_dir
        return base / self.config.project_name

    async def generate(self, output_dir: str | Path | None = None) -> GenerationResult:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.  Defaults to ``settings.output_dir``.

        Returns:
            A ``GenerationResult`` describing the run.

        Raises:
            ProjectExistsError: The target directory already exists.  Checked
                before anything is written.
            TemplateAssetError: The packaged boilerplate is missing.
        """
        project_root = self.target_path(output_dir)
        if project_root.exists():
            raise ProjectExistsError(project_root)
        self.copier.check()

        result = GenerationResult(project_path=project_root)
        await asyncio.to_thread(project_root.mkdir, parents=True)

        # 1. Copy the static boilerplate
        print_step("Bootstrapping application structure (errorHandler, ApiResponse, async handlers)")
        result.files.extend(await self.copier.copy(project_root))

        # 2. Drop database-only assets
        if not self.config.has_persistence:
            removed = await self.copier.remove(project_root, PERSISTENCE_ASSET_DIRS)
            removed_rel = [r.relative_to(project_root) for r in removed]
            result.files = [
                f for f in result.files
                if not any(f.is_relative_to(r) for r in removed_rel)
            ]

        # 3-4. Composition root and bootstrap
        await self._write(project_root, self.app_gen.output_path, self.app_gen.render(self.config), result)
        await self._write(project_root, self.server_gen.output_path, self.server_gen.render(self.config), result)

        # 5. Environment files
        print_step("Generating environment files")
        await self._render_env_files(project_root, result)

        # 6. Optional blocks
        if self.config.init_auth_boilerplate:
            print_step("Adding authentication boilerplate")
            written = await self.auth_gen.generate(project_root, self.config)
            result.files.extend(p.relative_to(project_root) for p in written)
        if self.config.init_test_boilerplate:
            print_step("Adding Jest smoke test")
            written = await self.test_gen.generate(project_root)
            result.files.extend(p.relative_to(project_root) for p in written)
        if self.config.init_container:
            print_step("Adding Docker configuration")
            written = await self.docker_gen.generate(project_root, self.config)
            result.files.extend(p.relative_to(project_root) for p in written)

        # 7. Manifest
        print_step("Setting up package.json")
        manifest = self.manifest_builder.render(self.config)
        await self._write(project_root, self.manifest_builder.output_path, manifest.dumps(), result)

        # 8. Dependencies
        if not self.settings.skip_install:
            outcome = await self.installer.install(
                project_root, manifest.runtime_packages, manifest.dev_packages
            )
            result.install_ok = outcome.ok
            result.warnings.extend(outcome.messages)
            if outcome.failed_command:
                result.failed_commands.append(outcome.failed_command)

        # 9. Version control
        if self.config.init_version_control:
            await self.renderer.render_to_file(
                "gitignore.j2", project_root / ".gitignore", {}
            )
            result.files.append(Path(".gitignore"))
            print_step("Initialising git repository")
            outcome = await self.git.initialize(project_root)
            result.git_ok = outcome.ok
            result.warnings.extend(outcome.messages)
            if outcome.failed_command:
                result.failed_commands.append(outcome.failed_command)

        return result

    # -- Helpers -----------------------------------------------------------

    async def _write(
        self, root: Path, rel: str, content: str, result: GenerationResult
    ) -> None:
        await asyncio.to_thread(write_text, root / rel, content)
        result.files.append(Path(rel))

    def _env_context(self) -> dict[str, Any]:
        return {
            "default_port": DEFAULT_PORT,
            "persistence": self.config.has_persistence,
            "db_name": _db_name(self.config.package_name),
            "cors": self.config.enabled(Feature.CROSS_ORIGIN),
            "rate_limit": self.config.enabled(Feature.RATE_LIMITING),
        }

    async def _render_env_files(self, root: Path, result: GenerationResult) -> None:
        """Render .env.example and an identical .env."""
        context = self._env_context()
        for output_name in (".env.example", ".env"):
            await self.renderer.render_to_file("env.example.j2", root / output_name, context)
            result.files.append(Path(output_name))


def _db_name(package_name: str) -> str:
    """Derive a MongoDB database name from the package name.

    E.g. ``'@acme/my-api'`` -> ``'acme_my_api'``.
    """
    cleaned = "".join(ch if ch.isalnum() else "_" for ch in package_name.lower())
    return "_".join(part for part in cleaned.split("_") if part) or "app"
