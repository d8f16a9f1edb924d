"""Normalizer: exposes script embedded in markup to a script parser.

Host-template documents (``.vue`` single-file components, ``.html`` pages)
carry their script inside ``<script>`` elements. Rather than extracting the
script and remapping offsets, the whole document is rewritten in place so
that the markup becomes block comments and only the script bodies remain
live code:

    <template><p/></template>        /*emplate><p/></template>
    <script lang="ts">          ->   <script lang="ts*/
    export default {}                export default {}
    </script>
    <style/>                         /*tyle*/

A closing tag and the rest of its line are blanked, and the comment over the
following markup opens on the next line. A ``//`` comment left open on the
script's last line then ends at the line break instead of hiding the ``/*``.
Markup that has no room for a comment is blanked.

Invariant: the output has the same length as the input and every line
terminator stays at the same index, so offsets and line/column positions
computed on the masked text are valid for the original text.
"""

from __future__ import annotations

import re

_SCRIPT_TAG = re.compile(r"<(script\b[^>]*)>|</script\s*>", re.IGNORECASE)

_LINE_TERMINATORS = frozenset("\r\n")


def _first_pair(chars: list[str], lo: int, hi: int) -> int:
    """Index of the left-most pair of adjacent non-terminators in [lo, hi), or -1."""
    for i in range(lo, hi - 1):
        if chars[i] not in _LINE_TERMINATORS and chars[i + 1] not in _LINE_TERMINATORS:
            return i
    return -1


def _last_pair(chars: list[str], lo: int, hi: int) -> int:
    """Index of the right-most pair of adjacent non-terminators in [lo, hi), or -1."""
    for i in range(hi - 2, lo - 1, -1):
        if chars[i] not in _LINE_TERMINATORS and chars[i + 1] not in _LINE_TERMINATORS:
            return i
    return -1


def _next_line(chars: list[str], lo: int, hi: int) -> int:
    """Index just past the first line terminator in [lo, hi), or hi."""
    for i in range(lo, hi):
        if chars[i] in _LINE_TERMINATORS:
            return i + 1
    return hi


def _blank(chars: list[str], lo: int, hi: int) -> None:
    for i in range(lo, hi):
        if chars[i] not in _LINE_TERMINATORS:
            chars[i] = " "


def _neutralize(chars: list[str], lo: int, hi: int) -> None:
    """Break every ``*/`` in markup so it cannot end the surrounding comment."""
    for i in range(lo, hi - 1):
        if chars[i] == "*" and chars[i + 1] == "/":
            chars[i + 1] = " "


def _mask_markup(chars: list[str], lo: int, hi: int, after_script: bool) -> None:
    """Turn the markup in [lo, hi) into one block comment, or blank it.

    The comment opens on the first pair of the region, or on the first pair
    after a line break when the region follows a script body, and closes on
    the region's last pair.
    """
    start = _next_line(chars, lo, hi) if after_script else lo
    _neutralize(chars, lo, hi)
    first = _first_pair(chars, start, hi)
    last = _last_pair(chars, start, hi)
    if first == -1 or last < first + 2:
        # No room for a comment: nothing in it can be script
        _blank(chars, lo, hi)
        return
    _blank(chars, lo, first)
    chars[first : first + 2] = "/*"
    chars[last : last + 2] = "*/"
    _blank(chars, last + 2, hi)


def find_script_bodies(text: str) -> list[tuple[int, int]]:
    """Return the (start, end) offsets of every embedded script body.

    A body runs from the end of an opening ``<script ...>`` tag to the start
    of the next ``</script>``, or to the end of the text when unclosed.
    Self-closing tags have no body.
    """
    bodies: list[tuple[int, int]] = []
    body_start = None
    for match in _SCRIPT_TAG.finditer(text):
        is_open = match.group(1) is not None
        if body_start is None:
            if is_open and not match.group(1).rstrip().endswith("/"):
                body_start = match.end()
        elif not is_open:
            bodies.append((body_start, match.start()))
            body_start = None
    if body_start is not None:
        bodies.append((body_start, len(text)))
    return bodies


def mask_host_template(text: str) -> str:
    """Turn host markup into comments, leaving embedded script live.

    Args:
        text: Original document text

    Returns:
        Masked text of identical length and line layout
    """
    chars = list(text)

    markup_start = 0
    after_script = False
    for body_start, body_end in find_script_bodies(text):
        _mask_markup(chars, markup_start, body_start, after_script)
        markup_start = body_end
        after_script = True
    # Empty when the last body is unclosed
    _mask_markup(chars, markup_start, len(chars), after_script)
    return "".join(chars)
