"""
Deduplicating, rate-limited log of errors, warnings and aborts.

Producers report every noteworthy condition as a ``(message, extra)`` pair
instead of interrupting control flow. Identical pairs are counted; only the
first ``times_to_print`` occurrences are echoed to the output stream, unless
the caller forces it. At the end of a run the aggregated counts tell
"informational, rare" conditions apart from "systemic, frequent" ones.
"""

from __future__ import annotations

import sys
from typing import Dict, Iterator, Optional, TextIO, Tuple

DiagnosticKey = Tuple[str, str]

_FRAME_WIDTH = 78


def _format(message: str, extra: str) -> str:
    return f"{message} {extra}".rstrip()


class DiagnosticLog:
    """Occurrence counts keyed by (message, extra detail)."""

    def __init__(self, times_to_print: int = 1, sink: Optional[TextIO] = None) -> None:
        if times_to_print < 1:
            raise ValueError("times_to_print must be >= 1")
        self.times_to_print = times_to_print
        self.sink = sink
        self._counts: Dict[DiagnosticKey, int] = {}

    def stream(self, sink: Optional[TextIO] = None) -> TextIO:
        """The explicit sink if given, else the default one, else stdout."""
        if sink is not None:
            return sink
        return self.sink if self.sink is not None else sys.stdout

    def record(
        self,
        message: str,
        extra: str = "",
        force_print: bool = False,
        sink: Optional[TextIO] = None,
    ) -> int:
        """Count one occurrence and echo it the first few times.

        Returns the updated occurrence count for the key.
        """
        key = (message, extra)
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        if count <= self.times_to_print or force_print:
            print(f" hepinfo {_format(message, extra)}", file=self.stream(sink))
        return count

    def count(self, message: str, extra: str = "") -> int:
        return self._counts.get((message, extra), 0)

    def total_count(self) -> int:
        """Sum of all stored counts, not capped by the print threshold."""
        return sum(self._counts.values())

    def items(self) -> Iterator[Tuple[DiagnosticKey, int]]:
        return iter(sorted(self._counts.items()))

    def report(self, sink: Optional[TextIO] = None) -> None:
        """Write one line per distinct key with its final count."""
        out = self.stream(sink)
        title = " hepinfo Error and Warning Messages Statistics "
        print(f"\n *{title:-^{_FRAME_WIDTH}}*", file=out)
        if not self._counts:
            print(" 0 occurrences: no errors or warnings to report", file=out)
        for (message, extra), count in self.items():
            print(f" {count} occurrences: {_format(message, extra)}", file=out)
        print(f" *{' End of Messages Statistics ':-^{_FRAME_WIDTH}}*", file=out)

    def merge(self, other: "DiagnosticLog") -> None:
        """Add another log's counts key by key, without echoing."""
        for key, count in other._counts.items():
            self._counts[key] = self._counts.get(key, 0) + count

    def reset(self) -> None:
        """Forget every key. Used between independent runs, never mid-run."""
        self._counts.clear()

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: object) -> bool:
        return key in self._counts
