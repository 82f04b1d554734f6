"""``bin/`` helper scripts used by the Docker image and the workflows."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from herokit.utils import make_executable

from .templates import TemplateRenderer

# Scripts that get the executable bit.
SHELL_SCRIPTS: tuple[str, ...] = ("entrypoint", "actions-vars", "build-image", "release")

# Run through ``node`` by actions-vars, so it stays non-executable.
APP_NAME_SCRIPT = "create-app-name.js"


class ScriptGenerator:
    """Generates the ``bin/`` scripts."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_all(
        self,
        bin_dir: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render all scripts into *bin_dir* and mark the shell ones executable.

        Args:
            bin_dir: The project's ``bin/`` directory.
            context: Template context; ``actions-vars`` needs ``app_name``
                and ``staging_app_name``.

        Returns:
            List of written script paths.
        """
        written: list[Path] = [
            await self.renderer.render_to_file(
                f"bin/{APP_NAME_SCRIPT}.j2", bin_dir / APP_NAME_SCRIPT, context
            )
        ]
        for name in SHELL_SCRIPTS:
            out = await self.renderer.render_to_file(
                f"bin/{name}.j2", bin_dir / name, context
            )
            await asyncio.to_thread(make_executable, out)
            written.append(out)
        return written
