"""Short app-name derivation for per-branch review apps.

Heroku app names are capped at 30 characters, so each review app is named
``{prefix}-{branch}-{hash}`` with fixed caps on the prefix (20) and hash (5)
and whatever is left over given to the branch.  The generated
``bin/create-app-name.js`` implements the same algorithm for CI; both must
produce identical names for apps that already exist.

Usage::

    herokit-app-name my-app feature/login 3f2a9c...
"""

from __future__ import annotations

import argparse
import hashlib
import re
import sys

MAX_LENGTH = 30
PREFIX_LENGTH = 20
HASH_LENGTH = 5
SEPARATOR = "-"

# Only the first run is replaced (no global flag in the CI script).
_UNSAFE_RUN = re.compile(r"[^\w-]+", re.ASCII)


def shorten_branch(branch: str, budget: int) -> str:
    """Normalise *branch* and cut it to *budget* characters.

    A non-positive budget gives an empty string.
    """
    cleaned = _UNSAFE_RUN.sub(SEPARATOR, branch, count=1).lower()
    return cleaned[: max(budget, 0)]


def derive(prefix: str, branch: str, hash: str) -> str:
    """Return the review-app identifier for *branch*.

    Examples::

        derive("app", "feature-x", "abcdef")   -> "app-feature-x-abcde"
        derive("app", "feature/x/y", "abcdef") -> "app-feature-x/y-abcde"
        derive("app", "", "abcdef")            -> "app--abcde"
    """
    prefix = prefix[:PREFIX_LENGTH]
    hash_fragment = hash[:HASH_LENGTH]
    budget = MAX_LENGTH - 2 * len(SEPARATOR) - len(prefix) - len(hash_fragment)
    short_branch = shorten_branch(branch, budget)
    return SEPARATOR.join((prefix, short_branch, hash_fragment))


def branch_hash(branch: str) -> str:
    """SHA-256 of the branch name as ``echo "$BRANCH" | sha256sum`` sees it."""
    return hashlib.sha256(f"{branch}\n".encode("utf-8")).hexdigest()


def review_app_name(prefix: str, branch: str) -> str:
    """Name of the review app ``bin/actions-vars`` computes for *branch*."""
    return derive(prefix, branch, branch_hash(branch))


def review_app_url(app_name: str) -> str:
    return f"https://{app_name}.herokuapp.com"


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``herokit-app-name PREFIX BRANCH HASH``."""
    parser = argparse.ArgumentParser(
        prog="herokit-app-name",
        description="Derive a short Heroku app name for a branch",
    )
    parser.add_argument("prefix", help="Application base name")
    parser.add_argument("branch", help="Branch name")
    parser.add_argument("hash", help="Commit or content hash")
    args = parser.parse_args(argv)

    sys.stdout.write(derive(args.prefix, args.branch, args.hash))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
