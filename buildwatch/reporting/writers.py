"""Output sinks for the console reporter.

``SynchronizedOutput`` owns the shared Rich console and serializes every
write to it with a single lock.  ``PrefixWriter`` is the per-unit sink: it
prefixes every line it writes with the unit's name and hands each chunk to
the shared output as one write, so output from different units can never
interleave inside a chunk.

Styled ``Text`` goes through the console's renderer; raw ``str`` (build
command output) is written to the console's file untouched, so carriage
returns, tabs and escape sequences reach the terminal as the command
produced them.

Lock order is always writer lock -> output lock.
"""

from __future__ import annotations

import codecs
import threading

from rich.console import Console
from rich.text import Text


class SynchronizedOutput:
    """A Rich console whose writes are serialized by one global lock.

    Parameters
    ----------
    console:
        The console every reporter write ends up on.
    """

    def __init__(self, console: Console) -> None:
        self.console = console
        self._lock = threading.Lock()

    def write(self, *parts: str | Text) -> None:
        """Write *parts* as one chunk: no wrapping, no cropping, no added newline.

        ``Text`` parts are rendered with their styles; ``str`` parts are
        written verbatim.
        """
        with self._lock:
            chunk = "".join(part if isinstance(part, str) else self._render(part) for part in parts)
            if not chunk:
                return
            self.console.file.write(chunk)
            self.console.file.flush()

    def _render(self, text: Text) -> str:
        if not text:
            return ""
        with self.console.capture() as capture:
            self.console.print(
                text, end="", soft_wrap=True, markup=False, emoji=False, highlight=False
            )
        return capture.get()


class PrefixWriter:
    """Per-unit sink that prefixes every line with a fixed ``Text``.

    A chunk that does not end in a newline leaves the writer mid-line; the
    next chunk continues that line without repeating the prefix.  Bytes are
    decoded incrementally, so a UTF-8 sequence split across two chunks is
    still decoded correctly; ``flush()`` emits whatever an unfinished
    sequence left behind.

    Parameters
    ----------
    output:
        The shared output to write to.
    prefix:
        Written at the start of every line.
    """

    def __init__(self, output: SynchronizedOutput, prefix: Text) -> None:
        self.prefix = prefix
        self._output = output
        self._lock = threading.Lock()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._at_line_start = True

    @property
    def at_line_start(self) -> bool:
        """Whether the next write starts a new, prefixed line."""
        return self._at_line_start

    def write(self, data: bytes | str | Text) -> int:
        """Write *data* through the prefix.  Returns the input length.

        ``bytes`` and ``str`` are written verbatim; ``Text`` keeps its styles.
        """
        with self._lock:
            chunk = self._decoder.decode(data) if isinstance(data, bytes) else data
            self._output.write(*self._prefixed(chunk))
        return len(data)

    def flush(self) -> None:
        """Emit any bytes held back by an unfinished UTF-8 sequence."""
        with self._lock:
            tail = self._decoder.decode(b"", final=True)
            if tail:
                self._output.write(*self._prefixed(tail))

    def _prefixed(self, chunk: str | Text) -> list[str | Text]:
        plain = chunk.plain if isinstance(chunk, Text) else chunk
        parts: list[str | Text] = []
        start = 0
        while start < len(plain):
            if self._at_line_start:
                parts.append(self.prefix)
            end = plain.find("\n", start)
            stop = len(plain) if end == -1 else end + 1
            parts.append(chunk[start:stop])
            self._at_line_start = end != -1
            start = stop
        return parts
