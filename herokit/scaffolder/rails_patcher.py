"""In-place edits to files of an existing Rails project.

Unlike the other generators these modify files ``rails new`` already
created.  A missing file is not an error: the edit is skipped with a warning
so the rest of the scaffold still lands.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from herokit.utils import print_warning, relative_to, write_file

from .templates import TemplateRenderer

# Everything from the first ``production:`` key to the end of the file.
_PRODUCTION_SECTION = re.compile(r"production:.*", re.DOTALL)

_APPLICATION_CLASS = re.compile(
    r"^.*class [a-z_:]+ < Rails::Application.*$", re.IGNORECASE | re.MULTILINE
)


@dataclass
class PatchReport:
    """Files that were edited and edits that had to be skipped."""

    patched: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def skip(self, reason: str) -> None:
        print_warning(f"Skipped: {reason}")
        self.skipped.append(reason)


class RailsPatcher:
    """Applies the Gemfile, database and application config edits."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def update_gemfile(self, root: Path, context: dict[str, Any]) -> Path:
        """Add the gem groups; must run before ``bundle install``."""
        gemfile = root / "Gemfile"
        await asyncio.to_thread(self.append_gem_groups, gemfile, context)
        return gemfile

    async def patch_config(self, root: Path, context: dict[str, Any]) -> PatchReport:
        """Edit ``config/database.yml`` and ``config/application.rb``."""
        report = PatchReport()

        database_yml = root / "config" / "database.yml"
        if await asyncio.to_thread(self.patch_database_yml, database_yml, context):
            report.patched.append(database_yml)
        else:
            report.skip(f"no production section in {relative_to(database_yml, root)}")

        application_rb = root / "config" / "application.rb"
        if await asyncio.to_thread(self.inject_environment, application_rb, context):
            report.patched.append(application_rb)
        else:
            report.skip(
                f"no Rails::Application class in {relative_to(application_rb, root)}"
            )

        return report

    # -- Gemfile -----------------------------------------------------------

    def append_gem_groups(self, gemfile: Path, context: dict[str, Any]) -> None:
        """Append the gem groups to *gemfile*, creating it if needed."""
        additions = self.renderer.render("rails/gemfile_additions.rb.j2", context)
        if not gemfile.exists():
            write_file(gemfile, additions.lstrip("\n"))
            return

        existing = gemfile.read_text(encoding="utf-8")
        if existing and not existing.endswith("\n"):
            existing += "\n"
        gemfile.write_text(existing + additions, encoding="utf-8")

    # -- config/database.yml -----------------------------------------------

    def patch_database_yml(self, path: Path, context: dict[str, Any]) -> bool:
        """Point the production database at ``DATABASE_URL``.

        Returns:
            ``True`` if the file was rewritten, ``False`` if the file or its
            production section is missing.
        """
        if not path.exists():
            return False
        text = path.read_text(encoding="utf-8")
        if not _PRODUCTION_SECTION.search(text):
            return False

        block = self.renderer.render("rails/database_production.yml.j2", context)
        path.write_text(
            _PRODUCTION_SECTION.sub(lambda _: block, text, count=1), encoding="utf-8"
        )
        return True

    # -- config/application.rb ---------------------------------------------

    def inject_environment(self, path: Path, context: dict[str, Any]) -> bool:
        """Insert the time zone and locale settings into the application class.

        The lines go directly below the ``class Application <
        Rails::Application`` line.

        Returns:
            ``True`` if the file was rewritten, ``False`` if the file or the
            class line is missing.
        """
        if not path.exists():
            return False
        text = path.read_text(encoding="utf-8")
        match = _APPLICATION_CLASS.search(text)
        if match is None:
            return False

        lines = self.renderer.render("rails/application_environment.rb.j2", context)
        insert_at = match.end() + 1 if match.end() < len(text) else len(text)
        head = text[:insert_at]
        if not head.endswith("\n"):
            head += "\n"
        path.write_text(head + lines + text[insert_at:], encoding="utf-8")
        return True
