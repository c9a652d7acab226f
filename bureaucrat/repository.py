"""Git repository access for bureaucrat.

All git state is read through the ``git`` command line, run from the
directory the repository was opened from.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAMES, ConfigurationNotFoundError
from .core import truncate_path

logger = logging.getLogger(__name__)

HOOK_NAME = "prepare-commit-msg"

HOOK_CONTENTS = '#!/usr/bin/env bash\nexec bureaucrat run "$@"'


class GitError(Exception):
    """Raised when a git command fails unexpectedly."""
    pass


class NoRepositoryError(GitError):
    """Raised when no git repository encloses the working directory."""
    pass


class NoBranchError(GitError):
    """Raised when HEAD does not point at a commit yet."""
    pass


def _git(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    # Error detection below matches git's English messages
    env = {**os.environ, "LC_ALL": "C"}
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=cwd,
            env=env,
        )
    except OSError as e:
        raise GitError(f"Could not run git: {e}") from e


@dataclass
class Repository:
    """A git repository located from a working directory."""

    path: Path
    git_dir: Path
    workdir: Path | None
    is_bare: bool

    @classmethod
    def open(cls, path: str | Path | None = None) -> "Repository":
        """Open the git repository enclosing path (default: current directory).

        Raises
        ------
        NoRepositoryError
            When path is not inside a git repository
        GitError
            When git fails for any other reason
        """
        cwd = Path(path) if path is not None else Path.cwd()

        result = _git(["rev-parse", "--absolute-git-dir", "--is-bare-repository"], cwd)
        if result.returncode != 0:
            if "not a git repository" in result.stderr:
                raise NoRepositoryError(result.stderr.strip())
            raise GitError(result.stderr.strip())
        git_dir, bare = result.stdout.strip().splitlines()
        is_bare = bare == "true"

        workdir = None
        if not is_bare:
            # Fails when run from inside the git directory itself
            result = _git(["rev-parse", "--show-toplevel"], cwd)
            if result.returncode == 0:
                workdir = Path(result.stdout.strip())

        return cls(path=cwd, git_dir=Path(git_dir), workdir=workdir, is_bare=is_bare)

    def discover_config(self) -> Path:
        """Find path to the bureaucrat configuration file.

        Raises
        ------
        ConfigurationNotFoundError
            When the work tree has none of the known configuration files
        """
        if self.workdir is None:
            logger.warning("Could not find work directory")
            raise ConfigurationNotFoundError("repository has no work directory")

        for filename in CONFIG_FILENAMES:
            path = self.workdir / filename
            if path.exists():
                logger.debug("Configuration file found at %s", truncate_path(path))
                return path

        raise ConfigurationNotFoundError(f"none of {', '.join(CONFIG_FILENAMES)} found")

    def current_branch(self) -> str:
        """Get the short name of the current HEAD branch.

        A detached HEAD is reported as "HEAD".

        Raises
        ------
        NoBranchError
            When HEAD is unborn (no commits yet)
        """
        result = _git(["rev-parse", "--abbrev-ref", "HEAD"], self.path)
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "unknown revision" in stderr or "ambiguous argument" in stderr:
                raise NoBranchError(stderr)
            raise GitError(stderr)
        return result.stdout.strip()

    @property
    def hook_path(self) -> Path:
        return self.git_dir / "hooks" / HOOK_NAME

    def install_hook(self) -> None:
        """Install the prepare-commit-msg hook into the repository."""
        hook_path = self.hook_path
        hook_path.parent.mkdir(parents=True, exist_ok=True)
        hook_path.write_text(HOOK_CONTENTS)
        hook_path.chmod(0o755)
