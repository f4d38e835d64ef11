"""
Locate tooth-number mentions in a transcript and cut a context window
around each one.

Recognised forms: "tooth 44", "tooth #44", "tooth number 44", "#44",
"number 44". Every mention yields its own window; the same tooth mentioned
twice is classified twice and de-duplicated later by the reconciler.
"""

import re
from dataclasses import dataclass
from typing import Iterator

DEFAULT_WINDOW_RADIUS = 100

TOOTH_MENTION_PATTERN = re.compile(
    r"(?:tooth\s*(?:number\s*|#\s*)?|#\s*|number\s+)(\d{1,2})(?!\d)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ContextWindow:
    tooth_number: str
    text: str
    start: int
    end: int


class ContextWindows:
    """Restartable view over the windows of one transcript.

    Nothing is scanned until iteration starts, and every new iteration
    rescans from the beginning.
    """

    def __init__(self, transcript: str, radius: int = DEFAULT_WINDOW_RADIUS) -> None:
        self._transcript = transcript or ""
        self._radius = max(0, radius)

    def __iter__(self) -> Iterator[ContextWindow]:
        text = self._transcript
        for match in TOOTH_MENTION_PATTERN.finditer(text):
            start = max(0, match.start() - self._radius)
            end = min(len(text), match.end() + self._radius)
            yield ContextWindow(
                tooth_number=match.group(1),
                text=text[start:end].lower(),
                start=start,
                end=end,
            )

    def __repr__(self) -> str:
        return f"ContextWindows(length={len(self._transcript)}, radius={self._radius})"

    def tooth_numbers(self) -> list:
        return [window.tooth_number for window in self]


def locate(transcript: str, radius: int = DEFAULT_WINDOW_RADIUS) -> ContextWindows:
    return ContextWindows(transcript, radius)
