"""``package.json`` generation.

``ManifestBuilder`` turns a ``ScaffoldConfig`` into a ``ManifestDocument``:
the package metadata, the scripts block, the ``#*`` subpath-import alias and
the runtime/dev dependency sets.

Every dependency is requested as ``"latest"``.  Generated projects always
start on the newest release of each package; exact pins are left to the
lockfile the package manager writes on install.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

from src.config import (
    BASE_FRAMEWORK_PACKAGE,
    DEV_FEATURES,
    Feature,
    ScaffoldConfig,
)

LATEST = "latest"
DEFAULT_DESCRIPTION = "A production-ready Node.js Express API"

# Source root alias used by every generated internal import (``#utils/...``).
IMPORT_ALIASES: dict[str, str] = {"#*": "./src/*"}

LOGGING_TRANSPORT_PACKAGE = "pino"
PRETTY_LOG_PACKAGE = "pino-pretty"
AUTH_PACKAGES: tuple[str, ...] = ("jsonwebtoken", "bcryptjs")
RESTART_TOOL_PACKAGE = "nodemon"
TEST_PACKAGES: tuple[str, ...] = ("jest", "supertest")

TEST_SCRIPT = "node --experimental-vm-modules node_modules/jest/bin/jest.js"
FORMAT_SCRIPT = 'prettier --write "src/**/*.{js,json}"'


class ManifestDocument(BaseModel):
    """In-memory representation of the generated ``package.json``."""

    name: str
    version: str = "1.0.0"
    description: str = DEFAULT_DESCRIPTION
    main: str = "src/server.js"
    type: str = "module"
    scripts: dict[str, str] = Field(default_factory=dict)
    imports: dict[str, str] = Field(default_factory=lambda: dict(IMPORT_ALIASES))
    keywords: list[str] = Field(default_factory=lambda: ["express", "node", "api"])
    author: str = ""
    license: str = "ISC"
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    jest: dict[str, Any] | None = None

    @property
    def runtime_packages(self) -> list[str]:
        return list(self.dependencies)

    @property
    def dev_packages(self) -> list[str]:
        return list(self.dev_dependencies)

    def to_package_json(self) -> dict[str, Any]:
        """Return the manifest as an ordered ``package.json`` mapping."""
        data: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "main": self.main,
            "type": self.type,
            "scripts": dict(self.scripts),
            "imports": dict(self.imports),
            "keywords": list(self.keywords),
            "author": self.author,
            "license": self.license,
            "dependencies": dict(self.dependencies),
            "devDependencies": dict(self.dev_dependencies),
        }
        if self.jest is not None:
            data["jest"] = self.jest
        return data

    def dumps(self) -> str:
        """Serialise to pretty-printed JSON with a trailing newline."""
        return json.dumps(self.to_package_json(), indent=2, ensure_ascii=False) + "\n"


def runtime_packages_for(config: ScaffoldConfig) -> list[str]:
    """Runtime packages in install order."""
    packages = [BASE_FRAMEWORK_PACKAGE]
    for feature in config.enabled_features:
        if feature in DEV_FEATURES:
            continue
        packages.append(feature.package)
    if config.enabled(Feature.REQUEST_LOGGING):
        packages.append(LOGGING_TRANSPORT_PACKAGE)
    if config.init_auth_boilerplate:
        packages.extend(AUTH_PACKAGES)
    return packages


def dev_packages_for(config: ScaffoldConfig) -> list[str]:
    """Development-only packages in install order."""
    packages = [RESTART_TOOL_PACKAGE]
    if config.enabled(Feature.CODE_FORMATTING):
        packages.append(Feature.CODE_FORMATTING.package)
    if config.pretty_dev_logging:
        packages.append(PRETTY_LOG_PACKAGE)
    if config.init_test_boilerplate:
        packages.extend(TEST_PACKAGES)
    return packages


class ManifestBuilder:
    """Builds the ``package.json`` document for a ``ScaffoldConfig``."""

    output_path = "package.json"

    def render(self, config: ScaffoldConfig) -> ManifestDocument:
        scripts = {
            "start": "node src/server.js",
            "dev": "nodemon src/server.js",
        }
        if config.enabled(Feature.CODE_FORMATTING):
            scripts["format"] = FORMAT_SCRIPT
        if config.init_test_boilerplate:
            scripts["test"] = TEST_SCRIPT

        return ManifestDocument(
            name=config.package_name,
            description=config.description.strip() or DEFAULT_DESCRIPTION,
            author=config.author.strip(),
            scripts=scripts,
            dependencies={pkg: LATEST for pkg in runtime_packages_for(config)},
            dev_dependencies={pkg: LATEST for pkg in dev_packages_for(config)},
            jest={"testEnvironment": "node"} if config.init_test_boilerplate else None,
        )
