from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from .models import TaskOutcome

DONE_MARKER = "Done"


class ConsoleReporter:
    """Writes user-visible output, one whole line at a time.

    Readings go to out, failure diagnostics to err. A lock keeps lines from
    concurrent tasks from interleaving mid-line; their order is whatever
    order the tasks finish in."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self._lock = threading.Lock()

    def report(self, outcome: TaskOutcome) -> None:
        if outcome.success:
            self._write(self._out, outcome.reading.as_line())
        else:
            self.failure(outcome.url, f"{outcome.error_type}: {outcome.error}")

    def failure(self, subject: str, cause: str) -> None:
        self._write(self._err, f"Task failed: {subject} {cause}")

    def done(self) -> None:
        self._write(self._out, DONE_MARKER)

    def _write(self, stream: TextIO, line: str) -> None:
        with self._lock:
            stream.write(line + "\n")
            stream.flush()
