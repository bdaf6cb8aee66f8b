"""
Markdown code fence tracking for commit bodies.

References and trailers inside fenced or indented code blocks are left
alone by the parser. The detector is fed one line at a time; a block is
opened by a line starting with one of :data:`FENCE_TYPES` and closed
only by a later line starting with the same marker.
"""

from __future__ import annotations

from typing import Tuple


FENCE_TYPES: Tuple[str, ...] = ("```", "~~~", "    ", "\t")


class FenceDetector:
    """Line-by-line markdown fence state."""

    def __init__(self) -> None:
        self._fence = -1

    @property
    def in_codeblock(self) -> bool:
        return self._fence > -1

    def update(self, line: str) -> None:
        for index, marker in enumerate(FENCE_TYPES):
            if not self.in_codeblock:
                if line.startswith(marker):
                    self._fence = index
                    break
            elif line.startswith(marker) and index == self._fence:
                self._fence = -1
                break
