"""express-scaffold configuration.

Two typed models live here:

* ``ScaffoldConfig`` -- the resolved answers for one generation run (which
  middleware to wire, which package manager to drive, which optional blocks
  to add).  It is frozen: built once, then passed read-only to every
  generator.
* ``RunSettings`` -- knobs for the generator process itself (output
  directory, whether to run the package manager, template overrides).

Both use Pydantic v2 so invalid input is rejected at construction time.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Feature(str, Enum):
    """Optional capabilities of the generated project.

    Declaration order is significant: the manifest lists runtime packages in
    this order.
    """

    PERSISTENCE = "persistence"
    CROSS_ORIGIN = "cross_origin"
    SECURE_HEADERS = "secure_headers"
    COOKIES = "cookies"
    REQUEST_LOGGING = "request_logging"
    RATE_LIMITING = "rate_limiting"
    ENV_LOADING = "env_loading"
    CODE_FORMATTING = "code_formatting"

    @property
    def package(self) -> str:
        """The npm package backing this feature."""
        return FEATURE_PACKAGES[self]


FEATURE_PACKAGES: dict[Feature, str] = {
    Feature.PERSISTENCE: "mongoose",
    Feature.CROSS_ORIGIN: "cors",
    Feature.SECURE_HEADERS: "helmet",
    Feature.COOKIES: "cookie-parser",
    Feature.REQUEST_LOGGING: "pino-http",
    Feature.RATE_LIMITING: "express-rate-limit",
    Feature.ENV_LOADING: "dotenv",
    Feature.CODE_FORMATTING: "prettier",
}

# Features whose package is a development-only tool.
DEV_FEATURES: frozenset[Feature] = frozenset({Feature.CODE_FORMATTING})

BASE_FRAMEWORK_PACKAGE = "express"


class PackageManager(str, Enum):
    """Supported Node.js package managers; ``npm`` is the primary one."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"

    @classmethod
    def resolve(cls, value: Any) -> "PackageManager":
        """Map raw user input to a manager, falling back to ``npm``."""
        if isinstance(value, cls):
            return value
        candidate = str(value or "").strip().lower()
        for member in cls:
            if member.value == candidate:
                return member
        return cls.NPM

    def add_command(self, packages: list[str], dev: bool = False) -> list[str]:
        """Return the argv that adds *packages* to the project.

        Packages are passed unpinned so the newest release is installed.
        """
        if self is PackageManager.NPM:
            base = ["npm", "install"] + (["--save-dev"] if dev else [])
        elif self is PackageManager.YARN:
            base = ["yarn", "add"] + (["--dev"] if dev else [])
        elif self is PackageManager.PNPM:
            base = ["pnpm", "add"] + (["--save-dev"] if dev else [])
        else:
            base = ["bun", "add"] + (["--dev"] if dev else [])
        return base + list(packages)

    def run_command(self, script: str) -> str:
        """Return the shell line that runs a manifest script."""
        if self in (PackageManager.NPM, PackageManager.BUN):
            return f"{self.value} run {script}"
        return f"{self.value} {script}"


# ---------------------------------------------------------------------------
# Configuration record
# ---------------------------------------------------------------------------


def _default_features() -> dict[Feature, bool]:
    return {feature: True for feature in Feature}


class ScaffoldConfig(BaseModel):
    """Resolved selections for a single scaffolding run.

    Every feature defaults to enabled (opt-out).  ``pretty_dev_logging`` is
    forced off when request logging is disabled, and a blank
    ``package_name`` falls back to ``project_name``.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Target directory name")
    package_name: str = Field(default="", description="package.json name")
    description: str = Field(default="")
    author: str = Field(default="")
    features: dict[Feature, bool] = Field(default_factory=_default_features)
    pretty_dev_logging: bool = Field(
        default=True, description="Add pino-pretty for development logs"
    )
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    init_version_control: bool = Field(default=False)
    init_container: bool = Field(default=False)
    init_auth_boilerplate: bool = Field(default=False)
    init_test_boilerplate: bool = Field(default=False)

    @field_validator("project_name")
    @classmethod
    def _strip_project_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("project_name must not be blank")
        return stripped

    @field_validator("features", mode="before")
    @classmethod
    def _fill_features(cls, value: Any) -> dict[Feature, bool]:
        merged = _default_features()
        for key, enabled in dict(value or {}).items():
            # Unknown keys raise ValueError here; that is a caller bug.
            merged[Feature(key)] = bool(enabled)
        return merged

    @field_validator("package_manager", mode="before")
    @classmethod
    def _resolve_package_manager(cls, value: Any) -> PackageManager:
        return PackageManager.resolve(value)

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        package_name = str(data.get("package_name") or "").strip()
        data["package_name"] = package_name or str(data.get("project_name") or "").strip()

        features = data.get("features") or {}
        logging_on = True
        for key, enabled in dict(features).items():
            if Feature(key) is Feature.REQUEST_LOGGING:
                logging_on = bool(enabled)
        if not logging_on:
            data["pretty_dev_logging"] = False
        return data

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    def enabled(self, feature: Feature) -> bool:
        """Return ``True`` if *feature* is selected."""
        return self.features[feature]

    @property
    def has_persistence(self) -> bool:
        return self.enabled(Feature.PERSISTENCE)

    @property
    def enabled_features(self) -> list[Feature]:
        """Selected features in declaration order."""
        return [f for f in Feature if self.features[f]]

    def summary(self) -> dict[str, str]:
        """Flat ``{label: value}`` mapping for the CLI summary table."""
        rows = {
            "Project": self.project_name,
            "Package name": self.package_name,
            "Package manager": self.package_manager.value,
        }
        for feature in Feature:
            rows[feature.package] = "yes" if self.features[feature] else "no"
        if self.enabled(Feature.REQUEST_LOGGING):
            rows["pino-pretty"] = "yes" if self.pretty_dev_logging else "no"
        rows["Git"] = "yes" if self.init_version_control else "no"
        rows["Docker"] = "yes" if self.init_container else "no"
        rows["Auth"] = "yes" if self.init_auth_boilerplate else "no"
        rows["Tests"] = "yes" if self.init_test_boilerplate else "no"
        return rows


# ---------------------------------------------------------------------------
# Generator run settings
# ---------------------------------------------------------------------------

_TRUTHY = {"1", "true", "yes", "on"}


class RunSettings(BaseModel):
    """Settings for the generator process (not the generated project)."""

    output_dir: Path = Field(default=Path("."))
    skip_install: bool = Field(
        default=False, description="Write files but do not run the package manager"
    )
    template_dir: Path | None = Field(
        default=None, description="Override the packaged Jinja2 template directory"
    )
    assume_defaults: bool = Field(
        default=False, description="Accept every default instead of prompting"
    )

    @classmethod
    def from_env(cls) -> "RunSettings":
        """Build ``RunSettings`` from environment variables.

        Recognised variables (all optional):
            EXPRESS_SCAFFOLD_OUTPUT_DIR, EXPRESS_SCAFFOLD_SKIP_INSTALL,
            EXPRESS_SCAFFOLD_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESS_SCAFFOLD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXPRESS_SCAFFOLD_OUTPUT_DIR"])
        if os.environ.get("EXPRESS_SCAFFOLD_SKIP_INSTALL"):
            kwargs["skip_install"] = (
                os.environ["EXPRESS_SCAFFOLD_SKIP_INSTALL"].strip().lower() in _TRUTHY
            )
        if os.environ.get("EXPRESS_SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["EXPRESS_SCAFFOLD_TEMPLATE_DIR"])
        return cls(**kwargs)
