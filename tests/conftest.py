"""Shared pytest fixtures for the express-scaffold test suite.

Provides reusable fixtures for:
- Scaffold configurations (defaults, everything off, everything on)
- A real TemplateRenderer over the packaged templates
- Exhaustive feature-flag combinations
- Mock subprocess helpers
"""

from __future__ import annotations

import itertools
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config import Feature, RunSettings, ScaffoldConfig
from src.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Feature combinations
# ---------------------------------------------------------------------------

def all_feature_maps() -> list[dict[Feature, bool]]:
    """Every on/off combination of the togglable features (2**8 maps)."""
    features = list(Feature)
    return [
        dict(zip(features, values))
        for values in itertools.product((False, True), repeat=len(features))
    ]


def make_config(
    features: dict[Feature, bool] | None = None, **kwargs
) -> ScaffoldConfig:
    """Build a ``ScaffoldConfig`` named ``my-api`` with overrides."""
    return ScaffoldConfig(project_name="my-api", features=features or {}, **kwargs)


@pytest.fixture(scope="session")
def feature_maps() -> list[dict[Feature, bool]]:
    """All 256 feature maps; combined with pino-pretty on/off that is 512."""
    return all_feature_maps()


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def default_config() -> ScaffoldConfig:
    """Every feature on, pino-pretty on, no optional blocks."""
    return make_config()


@pytest.fixture
def bare_config() -> ScaffoldConfig:
    """Every feature off."""
    return make_config({feature: False for feature in Feature})


@pytest.fixture
def full_config() -> ScaffoldConfig:
    """Every feature and every optional block on."""
    return make_config(
        init_version_control=True,
        init_container=True,
        init_auth_boilerplate=True,
        init_test_boilerplate=True,
    )


@pytest.fixture
def offline_settings(tmp_path: Path) -> RunSettings:
    """Run settings that write into ``tmp_path`` and never install."""
    return RunSettings(output_dir=tmp_path, skip_install=True)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    """A real renderer over the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
