"""herokit scaffolder -- writes the Heroku deployment setup into a Rails app.

Quick usage::

    from herokit.config import Config, ScaffoldAnswers
    from herokit.scaffolder import ProjectGenerator

    config = Config(
        target_dir=Path("my-app"),
        answers=ScaffoldAnswers(app_name="my-app", pipeline="..."),
    )
    generator = ProjectGenerator(config)
    result = await generator.generate()
    await generator.configure(result)
"""

from herokit.scaffolder.generator import ProjectGenerator, ScaffoldResult
from herokit.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectGenerator",
    "ScaffoldResult",
    "TemplateRenderer",
]
