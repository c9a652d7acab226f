"""Issue reference extraction from branch names.

Finds a configured issue code (or the built-in CVE code) at the start of a
slash-delimited branch segment and normalizes it to ``CODE-NUMBER`` or
``CVE-NUMBER-NUMBER``.
"""

from collections.abc import Sequence
from enum import Enum, auto

from .config import Config

CVE_CODE = "CVE"


class _ScanState(Enum):
    AWAIT_FIRST_DIGIT = auto()
    IN_DIGITS = auto()
    AFTER_SEPARATOR = auto()


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def extract_number_sequences(value: str, amount: int) -> str:
    """Extract ``amount`` hyphen-separated digit groups from the start of value.

    Leading hyphens before the first digit are skipped. Scanning stops at a
    letter (or any other character) once enough groups are found, so suffixes
    such as ``-fix`` are dropped.

    Examples:
    - ("--666", 1) -> "666"
    - ("2024-2032-years", 2) -> "2024-2032"
    - ("333--444", 2) -> ""  (repeated separator between groups)
    - ("blink-182", 1) -> ""  (text before the number)

    Returns
    -------
    str
        The matched digits exactly as written, or "" when there is no match
    """
    state = _ScanState.AWAIT_FIRST_DIGIT
    start = end = 0
    groups = 0

    for index, char in enumerate(value):
        if state is _ScanState.AWAIT_FIRST_DIGIT:
            if char == "-":
                continue
            if not _is_digit(char):
                return ""
            start, end = index, index + 1
            groups = 1
            state = _ScanState.IN_DIGITS
        elif state is _ScanState.IN_DIGITS:
            if _is_digit(char):
                end = index + 1
            elif char == "-" and groups < amount:
                state = _ScanState.AFTER_SEPARATOR
            else:
                break
        else:
            if _is_digit(char):
                end = index + 1
                groups += 1
                state = _ScanState.IN_DIGITS
            elif char == "-":
                return ""  # Repeating separators
            else:
                break

    if groups == 0 or groups < amount:
        return ""
    return value[start:end]


def prefix_matches(branch: str, prefixes: Sequence[str]) -> bool:
    """Check if branch starts with one of the required ``<prefix>/`` segments.

    An empty prefix list never rejects a branch.
    """
    if not prefixes:
        return True
    return any(branch.startswith(f"{prefix}/") for prefix in prefixes)


def _build_reference(code: str, rest: str, amount: int) -> str | None:
    number = extract_number_sequences(rest, amount)
    if not number:
        return None
    return f"{code}-{number}"


def find_issue_reference(config: Config, branch: str) -> str | None:
    """Find the issue reference for a branch name.

    Codes are only matched at the start of a segment (position 0 or right
    after a ``/``). Configured codes are tried in order before ``CVE``; the
    first code that matches decides the result, even when no number follows
    it.

    Examples (codes=["GH"]):
    - "feature/GH-1234-test-branch" -> "GH-1234"
    - "feature/GH1234" -> "GH-1234"
    - "security/CVE-2024-53908-SQL-injection" -> "CVE-2024-53908"
    - "feature/xGH-42" -> None
    - "feature/GH-abc" -> None

    Parameters
    ----------
    config : Config
        Loaded configuration with codes and branch prefixes
    branch : str
        Short name of the current branch

    Returns
    -------
    str | None
        Canonical reference, or None if the branch carries none
    """
    if not prefix_matches(branch, config.branch_prefixes):
        return None

    offset = 0
    while True:
        segment = branch[offset:]
        for code in config.codes:
            if segment.startswith(code):
                return _build_reference(code, segment[len(code) :], 1)
        if segment.startswith(CVE_CODE):
            return _build_reference(CVE_CODE, segment[len(CVE_CODE) :], 2)

        slash = segment.find("/")
        if slash == -1:
            return None
        offset += slash + 1
