"""Static boilerplate copying.

The files under ``src/scaffolder/boilerplate/`` are copied verbatim into every
generated project: the error/response utilities, the async handler wrapper,
the global error middleware, the healthcheck route and the database
connector.  Nothing here is rendered.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from .errors import TemplateAssetError

DEFAULT_BOILERPLATE_DIR = Path(__file__).parent / "boilerplate"

# Subtrees that only make sense with a database.
PERSISTENCE_ASSET_DIRS: tuple[str, ...] = ("src/db", "src/models")


class StaticAssetCopier:
    """Copies the fixed boilerplate tree into a project directory."""

    def __init__(self, source_dir: str | Path | None = None) -> None:
        self.source_dir = Path(source_dir) if source_dir else DEFAULT_BOILERPLATE_DIR

    def check(self) -> None:
        """Raise ``TemplateAssetError`` if the boilerplate tree is missing."""
        if not (self.source_dir / "src").is_dir():
            raise TemplateAssetError(self.source_dir)

    async def copy(self, destination: Path) -> list[Path]:
        """Copy the boilerplate tree into *destination*.

        Existing files at the destination are overwritten.

        Returns:
            Relative paths of every copied file, sorted.
        """
        self.check()
        await asyncio.to_thread(
            shutil.copytree, self.source_dir, destination, dirs_exist_ok=True
        )
        return sorted(
            p.relative_to(self.source_dir)
            for p in self.source_dir.rglob("*")
            if p.is_file()
        )

    async def remove(self, destination: Path, subtrees: tuple[str, ...]) -> list[Path]:
        """Delete *subtrees* (relative to *destination*) if present.

        Returns:
            The directories that were actually removed.
        """
        removed: list[Path] = []
        for rel in subtrees:
            target = destination / rel
            if target.is_dir():
                await asyncio.to_thread(shutil.rmtree, target)
                removed.append(target)
        return removed
