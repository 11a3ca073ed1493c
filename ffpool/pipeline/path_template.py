"""Output path templates.

A template is a literal string with optional placeholders that are filled in
from the decomposed input path:

- ``{dir}``: the input's parent directory as written (``""`` if none)
- ``{parent}``: the last component of that directory (``""`` if none)
- ``{name}``: the file name without its extension
- ``{ext}``: the extension without the dot

``/dest/{dir}/{name}_transcoded.{ext}`` mirrors the input tree under /dest.
"""

import os
import re
from pathlib import PurePath
from typing import List, Union
from ffpool.domain.exceptions import MissingPathComponent
from ffpool.domain.models import PathParts

PLACEHOLDER_NAMES = ("dir", "name", "ext", "parent")
_PLACEHOLDER_RE = re.compile(r"\{(" + "|".join(PLACEHOLDER_NAMES) + r")\}")


def decompose(path: Union[str, PurePath]) -> PathParts:
    """Splits an input path into the values the placeholders expand to."""
    raw = str(path)
    file_name = PurePath(raw).name if raw else ""
    if not file_name or file_name in (".", ".."):
        raise MissingPathComponent(raw, "file name")

    pure = PurePath(file_name)
    if len(pure.suffix) < 2:
        raise MissingPathComponent(raw, "extension")
    stem = pure.stem
    if not stem:
        raise MissingPathComponent(raw, "stem")

    directory = os.path.dirname(raw.rstrip("/" + os.sep))
    parent_name = PurePath(directory).name if directory else ""
    if parent_name == "..":
        parent_name = ""

    return PathParts(
        ext=pure.suffix[1:],
        name=stem,
        dir=directory,
        parent=parent_name,
    )


def expand(template: str, path: Union[str, PurePath]) -> str:
    """Expands every placeholder in template for one input path.

    Substitution is a single pass, so text inserted for one placeholder is
    never expanded again.
    """
    parts = decompose(path)
    values = parts.model_dump()
    return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template)


def placeholders(template: str) -> List[str]:
    """Returns the placeholders used by template, in order of first use."""
    seen: List[str] = []
    for match in _PLACEHOLDER_RE.finditer(template):
        if match.group(1) not in seen:
            seen.append(match.group(1))
    return seen
