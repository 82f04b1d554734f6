"""GitHub Actions workflow generation.

Five workflows are rendered into ``.github/workflows/``:

- ``deploy-master.yml``: build and release the production app on push to master
- ``run-tests.yml``: build the ``test-backend`` image and run the Rails tests
- ``create-review-app.yml``: create a Heroku review app when a PR opens
- ``deploy-review-app.yml``: redeploy an existing review app on every push
- ``destroy-review-app.yml``: tear the review app down when the PR closes

The first two run on the runner chosen in the wizard; the review-app
workflows need the Heroku CLI and always run on self-hosted runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from herokit.config import SELF_HOSTED_RUNNER

from .templates import TemplateRenderer

WORKFLOWS: tuple[str, ...] = (
    "deploy-master",
    "run-tests",
    "create-review-app",
    "deploy-review-app",
    "destroy-review-app",
)


class WorkflowGenerator:
    """Generates the CI/CD workflows."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate_all(
        self,
        workflows_dir: Path,
        context: dict[str, Any],
    ) -> dict[str, Path]:
        """Render every workflow into *workflows_dir*.

        Returns:
            Mapping of workflow name to written path, e.g.
            ``{"run-tests": Path(".../run-tests.yml"), ...}``.
        """
        ctx = {"review_runner": SELF_HOSTED_RUNNER, **context}
        result: dict[str, Path] = {}
        for name in WORKFLOWS:
            result[name] = await self.renderer.render_to_file(
                f"github/workflows/{name}.yml.j2",
                workflows_dir / f"{name}.yml",
                ctx,
            )
        return result
