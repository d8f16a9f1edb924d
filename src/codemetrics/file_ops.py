"""
File and pattern helpers for codemetrics.

Exclusion patterns follow shell-glob (minimatch) semantics and are matched
against the full document URI:

    *       any run of characters inside one path segment
    **      zero or more whole path segments
    ?       one character inside a segment
    [abc]   character class, [!abc] / [^abc] negated
    {a,b}   brace alternatives (nestable), {1..3} numeric ranges
    !pat    negated pattern
    #...    comment, never matches

Wildcards never match a segment that starts with a dot unless the pattern
segment itself starts with a dot.
"""

import re
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from .exceptions import FileAccessError

_NUMERIC_RANGE = re.compile(r"^(-?\d+)\.\.(-?\d+)$")

# One path segment that does not start with a dot
_SEGMENT = r"(?!\.)[^/]*"


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives and ``{1..3}`` ranges into plain patterns.

    Unbalanced or single-item braces are kept literally.
    """
    start = _find_unescaped(pattern, "{", 0)
    while start != -1:
        end, items = _split_brace(pattern, start)
        if end != -1 and items is not None:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            expanded: list[str] = []
            for item in items:
                expanded.extend(expand_braces(prefix + item + suffix))
            return expanded
        start = _find_unescaped(pattern, "{", start + 1)
    return [pattern]


def _find_unescaped(pattern: str, char: str, pos: int) -> int:
    i = pos
    while i < len(pattern):
        if pattern[i] == "\\":
            i += 2
            continue
        if pattern[i] == char:
            return i
        i += 1
    return -1


def _split_brace(pattern: str, start: int) -> tuple[int, "list[str] | None"]:
    """Find the brace closing the one at ``start`` and split its top-level items."""
    depth = 0
    items: list[str] = []
    current = start + 1
    i = start
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                items.append(pattern[current:i])
                return i, _brace_items(items)
        elif ch == "," and depth == 1:
            items.append(pattern[current:i])
            current = i + 1
        i += 1
    return -1, None


def _brace_items(items: list[str]) -> "list[str] | None":
    if len(items) > 1:
        return items
    match = _NUMERIC_RANGE.match(items[0])
    if match is None:
        return None
    first, last = int(match.group(1)), int(match.group(2))
    step = 1 if last >= first else -1
    return [str(n) for n in range(first, last + step, step)]


def _translate_segment(segment: str) -> str:
    """Translate one non-globstar path segment into a regex fragment."""
    parts: list[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "\\" and i + 1 < len(segment):
            parts.append(re.escape(segment[i + 1]))
            i += 2
        elif ch == "*":
            while i < len(segment) and segment[i] == "*":
                i += 1
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
            i += 1
        elif ch == "[":
            close = segment.find("]", i + 2)
            if close == -1:
                parts.append(re.escape(ch))
                i += 1
                continue
            body = segment[i + 1 : close]
            negate = body[:1] in ("!", "^")
            if negate:
                body = body[1:]
            body = body.replace("\\", "\\\\")
            parts.append(f"[^/{body}]" if negate else f"[{body}]")
            i = close + 1
        else:
            parts.append(re.escape(ch))
            i += 1

    regex = "".join(parts)
    if segment[:1] in ("*", "?", "["):
        regex = r"(?!\.)" + regex
    return regex


def _translate(pattern: str) -> str:
    """Translate a brace-free glob into an anchored regex."""
    segments = pattern.split("/")
    out = ""
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment == "**":
            if index == last and out.endswith("/"):
                # Trailing globstar: the directory itself or anything below it
                out = out[:-1] + f"(?:/{_SEGMENT})*"
            elif index == last:
                out += f"{_SEGMENT}(?:/{_SEGMENT})*"
            else:
                out += f"(?:{_SEGMENT}/)*"
            continue
        out += _translate_segment(segment)
        if index != last:
            out += "/"
    return out


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> "tuple[re.Pattern[str], bool] | None":
    """Compile a glob into (regex, negated); None for comments and empty patterns.

    Raises:
        re.error: If the translated pattern is not a valid regex
    """
    negated = False
    while pattern.startswith("!"):
        negated = not negated
        pattern = pattern[1:]
    if not pattern or pattern.startswith("#"):
        return None
    alternatives = "|".join(_translate(p) for p in expand_braces(pattern))
    return re.compile(f"(?:{alternatives})", re.DOTALL), negated


def match_glob(path: str, pattern: str) -> bool:
    """Return True if ``path`` matches the glob ``pattern``.

    Raises:
        re.error: If the pattern cannot be compiled
    """
    compiled = compile_glob(pattern)
    if compiled is None:
        return False
    regex, negated = compiled
    return (regex.fullmatch(path) is not None) != negated


def should_skip_file(filepath: Path, exclude_patterns: Sequence[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        filepath: File to check
        exclude_patterns: List of glob patterns to exclude

    Returns:
        True if the file's URI or POSIX path matches any pattern
    """
    candidates = (filepath.resolve().as_uri(), filepath.as_posix())
    for pattern in exclude_patterns:
        if any(match_glob(candidate, pattern) for candidate in candidates):
            return True
    return False


def safe_read_file(filepath: Path, encoding: str = "utf-8", errors: str = "replace") -> str:
    """
    Read a source file, converting OS failures into FileAccessError.

    Args:
        filepath: File to read
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read
    """
    try:
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")
