"""Text document snapshot with offset/position mapping.

Offsets are Python string indices (code points). Lines are split on
``\\n``, ``\\r\\n`` and ``\\r``, the same terminators an editor uses.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from lsprotocol.types import Position

from .exceptions import UnsupportedLanguageError

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class TextDocument:
    """An immutable snapshot of a document handed in by the host.

    Attributes:
        uri: Document URI (``file:///...`` for files on disk)
        language_id: Editor language identifier (e.g. ``"typescript"``)
        text: Full document content
        version: Host-provided version number
    """

    uri: str
    language_id: str
    text: str
    version: int = 0
    _line_offsets: list[int] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._line_offsets = [0] + [m.end() for m in _LINE_BREAK.finditer(self.text)]

    def get_text(self) -> str:
        return self.text

    def position_at(self, offset: int) -> Position:
        """Convert a character offset into a zero-based line/character position."""
        offset = max(0, min(offset, len(self.text)))
        line = bisect_right(self._line_offsets, offset) - 1
        return Position(line=line, character=offset - self._line_offsets[line])

    @classmethod
    def from_path(
        cls, path: Path, language_id: Optional[str] = None, encoding: str = "utf-8"
    ) -> "TextDocument":
        """Load a document from disk, detecting the language id from its extension.

        Raises:
            FileAccessError: If the file cannot be read
            UnsupportedLanguageError: If no language id is given and the
                extension is unknown
        """
        from .file_ops import safe_read_file
        from .languages import detect_language_id, supported_language_ids

        if language_id is None:
            language_id = detect_language_id(path)
            if language_id is None:
                raise UnsupportedLanguageError(path.suffix or str(path), supported_language_ids())

        text = safe_read_file(path, encoding=encoding)
        return cls(uri=path.resolve().as_uri(), language_id=language_id, text=text)
