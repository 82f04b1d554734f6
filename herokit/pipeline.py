"""herokit scaffolding run.

Implements the four steps of a run against an existing Rails project:

Step 1: ASK       -- Collect answers interactively or from an answers file.
Step 2: SCAFFOLD  -- Append gem groups, write Docker, bin, CI and Heroku files.
Step 3: INSTALL   -- ``bundle install`` and ``yarn install``.
Step 4: CONFIGURE -- Point production at DATABASE_URL, set time zone and locale.

Usage::

    herokit path/to/rails-app
    herokit path/to/rails-app --answers answers.json --skip-install
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError
from rich.panel import Panel

from herokit.config import Config, ScaffoldAnswers
from herokit.naming import review_app_url
from herokit.scaffolder import ProjectGenerator, ScaffoldResult
from herokit.utils import (
    PHASE_NAMES,
    console,
    print_error,
    print_phase_header,
    print_success,
    print_summary_table,
    relative_to,
    run_command,
)
from herokit.wizard import ask_answers, load_answers

INSTALL_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("bundle", "install"),
    ("yarn", "install"),
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a scaffolding step fails irrecoverably."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"{PHASE_NAMES.get(step, '?')}: {message}")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one scaffolding run.

    Attributes:
        config: Run configuration; ``answers`` is filled in by step 1 when
            not already set.
        ask: Callable returning answers when none are configured.
    """

    def __init__(
        self,
        config: Config,
        ask: Callable[[], ScaffoldAnswers] = ask_answers,
    ) -> None:
        self.config = config
        self.ask = ask

    async def run(self) -> ScaffoldResult:
        """Execute all steps in order.

        Raises:
            ScaffoldError: If the target directory is missing or an install
                command fails.
        """
        root = self.config.target_dir
        if not root.is_dir():
            raise ScaffoldError(2, f"Target directory not found: {root}")

        print_phase_header(1, PHASE_NAMES[1])
        if self.config.answers is None:
            self.config.answers = self.ask()
        answers = self.config.answers

        console.print(
            Panel(
                f"App      : {answers.app_name}\n"
                f"Staging  : {answers.staging_app_name}\n"
                f"Repo     : {answers.repository}\n"
                f"Pipeline : {answers.pipeline or '(none)'}\n"
                f"Runner   : {answers.runner}",
                title="[bold]herokit[/bold]",
                border_style="bright_cyan",
            )
        )

        print_phase_header(2, PHASE_NAMES[2])
        generator = ProjectGenerator(self.config)
        result = await generator.generate()
        print_success(f"Wrote {len(result.written)} files")

        print_phase_header(3, PHASE_NAMES[3])
        if self.config.skip_install:
            console.print("[dim]Skipping dependency installation.[/dim]")
        else:
            await self.install()

        print_phase_header(4, PHASE_NAMES[4])
        await generator.configure(result)

        self._print_summary(result)
        return result

    async def install(self) -> None:
        """Run the install commands in the target directory."""
        for cmd in INSTALL_COMMANDS:
            console.print(f"  Running [cyan]{' '.join(cmd)}[/cyan]")
            code, _stdout, stderr = await run_command(
                list(cmd), cwd=self.config.target_dir
            )
            if code != 0:
                raise ScaffoldError(
                    3, f"'{' '.join(cmd)}' exited with {code}: {stderr}"
                )

    def _print_summary(self, result: ScaffoldResult) -> None:
        root = self.config.target_dir
        answers = self.config.answers
        data = {
            "Written": "\n".join(relative_to(p, root) for p in result.written),
            "Patched": "\n".join(relative_to(p, root) for p in result.patched),
        }
        if result.skipped:
            data["Skipped"] = "\n".join(result.skipped)
        if answers is not None:
            data["Production URL"] = review_app_url(answers.app_name)
            data["Staging URL"] = review_app_url(answers.staging_app_name)
        print_summary_table(data, title="Scaffold")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``herokit``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="herokit",
        description="Scaffold Heroku container deployment for a Rails app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  herokit ./my-app\n"
            "  herokit ./my-app --answers answers.json --skip-install\n"
            "  herokit ./my-app --ruby-version 2.7.2 --save-answers\n"
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Rails project directory (default: $HEROKIT_TARGET_DIR or .)",
    )
    parser.add_argument(
        "--answers",
        default=None,
        help="JSON file with answers; skips the interactive questions",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not run bundle install / yarn install",
    )
    parser.add_argument("--ruby-version", default=None, help="Ruby version for the Docker image")
    parser.add_argument("--node-version", default=None, help="Node version for the Docker image")
    parser.add_argument(
        "--save-answers",
        action="store_true",
        help="Write the answers to .herokit/answers.json in the target",
    )

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        if args.target:
            config.target_dir = Path(args.target)
        if args.ruby_version:
            config.ruby_version = args.ruby_version
        if args.node_version:
            config.node_version = args.node_version
        if args.skip_install:
            config.skip_install = True
        if args.answers:
            config.answers = load_answers(args.answers)
    except (OSError, ValueError) as exc:
        # pydantic.ValidationError is a ValueError
        print_error(f"Error: {exc}")
        sys.exit(1)

    pipeline = Pipeline(config)
    try:
        asyncio.run(pipeline.run())
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ValidationError as exc:
        print_error(f"Invalid answers: {exc}")
        sys.exit(1)

    if args.save_answers:
        path = config.save()
        console.print(f"Answers saved to {path}")

    print_success("Scaffold complete!")


if __name__ == "__main__":
    main()
