"""
Buffered Logging
Collects diagnostic output (application and pymongo driver loggers) in memory
while the operator is at the prompt, and writes it out once the session ends.
"""
import io
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FLUSH_HEADING = "Diagnostic log (buffered during the session):"


@contextmanager
def buffered_logging(level: str = "INFO", stream: TextIO = None) -> Iterator[io.StringIO]:
    """
    Route all log records into an in-memory buffer for the duration of the block.

    The root logger's existing handlers are detached so nothing is written to the
    terminal mid-session. On exit (normal or not) they are restored and the
    buffered text is written to `stream` (defaults to stderr) under a heading.
    """
    buffer = io.StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    for existing in saved_handlers:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    try:
        yield buffer
    finally:
        root.removeHandler(handler)
        for existing in saved_handlers:
            root.addHandler(existing)
        root.setLevel(saved_level)
        handler.close()

        captured = buffer.getvalue()
        out = stream or sys.stderr
        out.write("\n" + FLUSH_HEADING + "\n")
        out.write("-" * 140 + "\n")
        out.write(captured if captured else "(no diagnostic output)\n")
        out.flush()
