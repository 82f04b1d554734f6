"""Heroku manifests, env files and the error-reporting initializer."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


class ManifestGenerator:
    """Generates ``app.json``, ``app.master.json``, env files and initializers."""

    # Template name -> output path relative to the project root
    _FILES: dict[str, str] = {
        "app.json.j2": "app.json",
        "app.master.json.j2": "app.master.json",
        "env.development.j2": ".env.development",
        "env.test.j2": ".env.test",
        "config/initializers/airbrake.rb.j2": "config/initializers/airbrake.rb",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_all(
        self,
        output_dir: Path,
        context: dict[str, Any],
    ) -> dict[str, Path]:
        """Render every manifest under *output_dir*.

        ``app.json`` describes review apps (container stack, required env,
        addons); ``app.master.json`` is the trimmed production variant passed
        to the release action.

        Returns:
            Mapping of relative output path to written path.
        """
        result: dict[str, Path] = {}
        for template_name, relative in self._FILES.items():
            result[relative] = await self.renderer.render_to_file(
                template_name, output_dir / relative, context
            )
        return result
