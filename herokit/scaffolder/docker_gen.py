"""Dockerfile and .dockerignore generation.

The Dockerfile is multi-stage: ``gems`` and ``npms`` install dependencies,
``web`` is the runtime image, ``release`` runs migrations on Heroku release,
and ``test-backend`` runs the Rails test suite in CI.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


class DockerGenerator:
    """Generates the container build files at the project root."""

    # Template name -> output file name
    _DOCKER_FILES: dict[str, str] = {
        "Dockerfile.j2": "Dockerfile",
        "dockerignore.j2": ".dockerignore",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_all(
        self,
        output_dir: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Generate ``Dockerfile`` and ``.dockerignore`` in *output_dir*.

        Args:
            output_dir: Project root directory.
            context: Template rendering context.  Must include
                ``ruby_version`` and ``node_version``.

        Returns:
            List of written file paths.
        """
        written: list[Path] = []
        for template_name, output_name in self._DOCKER_FILES.items():
            path = await self.renderer.render_to_file(
                template_name, output_dir / output_name, context
            )
            written.append(path)
        return written
