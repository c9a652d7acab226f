"""Commit message rewriting for the prepare-commit-msg hook."""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def prepend_reference(path: Path, reference: str) -> None:
    """Put reference in front of the commit message, after two blank lines.

    The new message is written to a temporary file next to path and swapped
    into place, so git never sees a half-written message. The temporary file
    is removed whenever the swap does not happen.

    Raises
    ------
    FileNotFoundError
        If the commit message file does not exist
    UnicodeDecodeError
        If the commit message is not valid UTF-8
    OSError
        If the temporary file cannot be created or written
    """
    contents = path.read_text(encoding="utf-8")

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    replaced = False
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(f"\n\n{reference}{contents}")
        try:
            os.replace(temp_name, path)
            replaced = True
        except OSError as e:
            logger.warning("Could not overwrite commit message: %s", e)
    finally:
        if not replaced:
            os.unlink(temp_name)
