"""Include/exclude glob evaluation for archive membership"""

import functools
import re
from typing import Pattern, Sequence

from ..models.settings import FileFilter


def normalize_path(path: str) -> str:
    """Normalize a relative path to ``/`` separators without leading ``./``"""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern[str]:
    """
    Translate a glob pattern into an anchored regular expression

    ``*`` matches any run of characters except ``/``, ``?`` one character
    except ``/``, ``[...]`` a character class and ``**`` any run including
    ``/``. A ``**/`` segment also matches zero directories.

    Args:
        pattern: Glob pattern using ``/`` separators

    Returns:
        Compiled regular expression
    """
    pattern = normalize_path(pattern)
    i, n = 0, len(pattern)
    parts = []

    while i < n:
        c = pattern[i]

        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                at_segment_start = i == 2 or pattern[i - 3] == "/"
                if at_segment_start and i < n and pattern[i] == "/":
                    # "**/" crosses zero or more directories
                    parts.append("(?:.*/)?")
                    i += 1
                else:
                    parts.append(".*")
            else:
                parts.append("[^/]*")
                i += 1

        elif c == "?":
            parts.append("[^/]")
            i += 1

        elif c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1

            if j >= n:
                # Unterminated class is a literal bracket
                parts.append(re.escape(c))
                i += 1
            else:
                body = pattern[i + 1:j].replace("\\", "\\\\")
                if body[:1] in ("!", "^"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                i = j + 1

        else:
            parts.append(re.escape(c))
            i += 1

    return re.compile("".join(parts) + r"\Z")


def pattern_matches(relative_path: str, pattern: str) -> bool:
    """Check a single pattern against a relative path"""
    return compile_pattern(pattern).match(normalize_path(relative_path)) is not None


def default_decision(filters: Sequence[FileFilter]) -> bool:
    """
    Decision for a path no filter matches

    Paths are included by default. Once the list names at least one include
    pattern, it acts as an allow-list and unmatched paths are left out.
    """
    return not any(f.include for f in filters)


def matches(relative_path: str, filters: Sequence[FileFilter]) -> bool:
    """
    Decide whether a relative path belongs in the archive

    Filters are evaluated in declaration order and every matching filter
    overwrites the decision, so the last match wins.

    Args:
        relative_path: Path relative to the analyzed root
        filters: Ordered include/exclude filters

    Returns:
        True if the path is included
    """
    path = normalize_path(relative_path)
    included = default_decision(filters)

    for file_filter in filters:
        if compile_pattern(file_filter.pattern).match(path) is not None:
            included = file_filter.include

    return included
