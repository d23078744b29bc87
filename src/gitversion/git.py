"""Thin wrapper around the git command line."""

import shutil
import subprocess
from pathlib import Path

import sentry_sdk

from gitversion.logging import logger


class GitRepo:
    """
    Runs read-only git queries inside a checkout.

    Every query returns the stripped standard output of the command, or None
    if git is missing or the command exits with a non-zero status. Callers
    fall back to defaults instead of handling errors.
    """

    def __init__(self, directory: str | Path, executable: str = "git") -> None:
        self.directory = Path(directory)
        self.executable = executable

    def available(self) -> bool:
        """Check whether the git executable can be found."""
        return shutil.which(self.executable) is not None

    def run(self, *args: str) -> str | None:
        sentry_sdk.add_breadcrumb(
            category="git",
            message=f"git {' '.join(args)}",
            level="debug",
            data={"directory": str(self.directory)},
        )
        try:
            result = subprocess.run(
                [self.executable, *args],
                cwd=self.directory,
                capture_output=True,
                text=True,
                check=False,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            logger.debug("git could not be started error={error}", error=str(e))
            return None

        if result.returncode != 0:
            logger.debug(
                "git {command} failed returncode={returncode} stderr={stderr}",
                command=" ".join(args),
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
            return None
        return result.stdout.strip()

    def describe_tags(self, match: str) -> str | None:
        """Describe HEAD relative to the closest tag matching the glob."""
        return self.run("describe", "--tags", "--match", match)

    def commit_count(self) -> str | None:
        return self.run("rev-list", "--count", "HEAD")

    def describe_dirty(self) -> str | None:
        return self.run("describe", "--always", "--dirty")

    def current_branch(self) -> str | None:
        """Branch name, or 'HEAD' for a detached checkout."""
        return self.run("rev-parse", "--abbrev-ref", "HEAD")

    def short_hash(self) -> str | None:
        return self.run("rev-parse", "--short", "HEAD")

    def full_hash(self) -> str | None:
        return self.run("rev-parse", "HEAD")
