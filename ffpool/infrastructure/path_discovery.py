import glob
import logging
from pathlib import Path
from typing import List
from ffpool.domain.exceptions import InvalidPatternError

logger = logging.getLogger(__name__)

def validate_pattern(pattern: str) -> None:
    """Rejects malformed glob patterns before anything is dispatched.

    Python's glob silently treats most malformed patterns as literals, so the
    structural errors are checked here: `**` must be a whole path component
    and character classes must be closed.
    """
    if not pattern:
        raise InvalidPatternError(pattern, "pattern is empty")

    for component in pattern.replace("\\", "/").split("/"):
        if "**" in component and component != "**":
            raise InvalidPatternError(
                pattern, "recursive wildcards must form a single path component"
            )

    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            end = i + 1
            if end < len(pattern) and pattern[end] in "!^":
                end += 1
            # A leading ']' is a literal member of the class
            if end < len(pattern) and pattern[end] == "]":
                end += 1
            close = pattern.find("]", end)
            if close == -1:
                raise InvalidPatternError(pattern, "unclosed character class")
            i = close
        i += 1

def discover(pattern: str) -> List[Path]:
    """Expands pattern into the list of existing paths it matches."""
    validate_pattern(pattern)
    matches = sorted(glob.glob(pattern, recursive=True))
    logger.info(f"Discovery: pattern={pattern!r} matched={len(matches)}")
    return [Path(m) for m in matches]
