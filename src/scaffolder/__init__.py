"""express-scaffold scaffolder -- generates Express API projects.

This package takes a ``ScaffoldConfig`` and renders a ready-to-run Node.js
Express backend: boilerplate utilities, a composition root (``src/app.js``)
and bootstrap file (``src/server.js``) tailored to the selected middleware,
and a ``package.json`` manifest.

Quick usage::

    from src.config import ScaffoldConfig
    from src.scaffolder import ProjectGenerator

    config = ScaffoldConfig(project_name="my-api", features={"persistence": False})
    result = await ProjectGenerator(config).generate("/tmp/output")
"""

from src.scaffolder.app_gen import CompositionRootGenerator
from src.scaffolder.generator import GenerationResult, ProjectGenerator
from src.scaffolder.manifest_gen import ManifestBuilder, ManifestDocument
from src.scaffolder.server_gen import BootstrapGenerator
from src.scaffolder.templates import TemplateRenderer

__all__ = [
    "BootstrapGenerator",
    "CompositionRootGenerator",
    "GenerationResult",
    "ManifestBuilder",
    "ManifestDocument",
    "ProjectGenerator",
    "TemplateRenderer",
]
