"""Main CLI entry point for bureaucrat."""

import logging
from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter

from .config import ConfigurationNotFoundError, InvalidConfigurationError, load_config
from .core import LOG_LEVELS, configure_logging, truncate_path
from .message import prepend_reference
from .parse import find_issue_reference
from .repository import GitError, NoBranchError, NoRepositoryError, Repository

logger = logging.getLogger(__name__)

CommitSource = Literal["message", "template", "merge", "squash", "commit"]

app = App(
    name="bureaucrat",
    help="Adds issue references from branch names to commit messages.\n\n"
    "Use 'bureaucrat COMMAND --help' for detailed command options.",
    version_flags=["--version", "-v"],
)


@app.meta.default
def launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Annotated[
        str, Parameter(name=["--log-level", "-l"], env_var="BUREAUCRAT_LOG")
    ] = "info",
):
    """Set up logging, then run the requested command.

    Parameters
    ----------
    log_level : str
        Logging level (off, error, warn, info, debug, trace), case-insensitive
    """
    level = log_level.lower()
    if level not in LOG_LEVELS:
        configure_logging("info")
        logger.warning("Unknown log level '%s'; using 'info'", log_level)
    else:
        configure_logging(level)
    app(tokens)


@app.command
def install(*, overwrite: bool = False):
    """Install the hook: install [--overwrite]

    Writes a prepare-commit-msg hook into the current repository that calls
    'bureaucrat run'.

    Parameters
    ----------
    overwrite : bool
        Install hook even if a prepare-commit-msg hook exists already
    """
    try:
        repository = Repository.open()
        if repository.is_bare:
            logger.warning("Repository is bare; not installing hook")
            raise SystemExit(1)

        hook_path = repository.hook_path
        if hook_path.exists():
            if not overwrite:
                logger.error("Hook already exists at %s", truncate_path(hook_path))
                logger.info("Use `bureaucrat install --overwrite` to install hook anyways")
                raise SystemExit(1)
            logger.debug("Overwriting existing hook")

        repository.install_hook()
        logger.info("Hook installed at %s", truncate_path(hook_path))
    except NoRepositoryError:
        logger.error("Could not find repository")
        raise SystemExit(1)
    except GitError as e:
        logger.error("Error while accessing repository: %s", e)
        raise SystemExit(1)
    except OSError as e:
        logger.error("IO error: %s", e)
        raise SystemExit(1)


def _tag_commit_message(path: Path) -> None:
    repository = Repository.open()
    config = load_config(repository.discover_config())
    logger.debug(
        "Using codes %s for branches %s",
        list(config.codes),
        list(config.branch_prefixes),
    )

    branch = repository.current_branch()
    reference = find_issue_reference(config, branch)
    if reference is None:
        logger.debug("No issue reference found in '%s'", branch)
        return

    try:
        prepend_reference(path, reference)
    except FileNotFoundError:
        logger.error("File not found: %s", path)
        raise SystemExit(1)


@app.command(show=False)
def run(path: Path, commit: CommitSource | None = None, sha: str | None = None):
    """Entrypoint for the prepare-commit-msg hook: run PATH [COMMIT] [SHA]

    Parameters
    ----------
    path : Path
        Path to the file that holds the commit message so far
    commit : str
        Source of the commit message (message, template, merge, squash, commit)
    sha : str
        Commit SHA-1 if this is an amended commit
    """
    if commit is None:
        logger.debug("Tagging unspecified commit type")
    elif commit == "template":
        logger.debug("Tagging 'template' type commit")
    else:
        logger.debug("Skipping tagging for '%s' type commit", commit)
        return

    try:
        _tag_commit_message(path)
    except InvalidConfigurationError as e:
        logger.warning("Configuration could not be parsed: %s", e)
    except NoBranchError:
        logger.warning("Branch doesn't exist yet")
    except ConfigurationNotFoundError:
        logger.warning("No configuration file was found")
    except NoRepositoryError:
        logger.error("Could not find repository")
        raise SystemExit(1)
    except GitError as e:
        logger.error("Error while accessing repository: %s", e)
        raise SystemExit(1)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("IO error: %s", e)
        raise SystemExit(1)


def main():
    app.meta()


if __name__ == "__main__":
    main()
