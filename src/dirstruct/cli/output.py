"""Signal-aware output for the dirstruct CLI.

Views are often piped into pagers or ``head``. This module records SIGPIPE, and SIGINT while
output is being written, instead of dying with a traceback, and provides a writer that stops
producing output once either signal has been seen so the CLI can exit with the matching code.
"""

import atexit
import errno
import os
import signal
import sys
from contextlib import contextmanager
from threading import Event
from types import FrameType
from typing import Iterable, Iterator, Optional, TextIO

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class SignalHandler:
    """Record interruption signals so output can stop cleanly.

    Attributes:
        sigpipe_received: Set when the output pipe was closed by the reader.
        sigint_received: Set when the user pressed Ctrl+C.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()

    @property
    def interrupted(self) -> bool:
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit code matching the recorded signal, or None if there was none."""
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        # A second Ctrl+C terminates immediately.
        signal.signal(signal.SIGINT, signal.default_int_handler)

    def reset(self) -> None:
        self.sigpipe_received.clear()
        self.sigint_received.clear()


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGPIPE handler. SIGPIPE only exists on Unix-like systems.

    SIGINT keeps Python's default handler, so Ctrl+C during a traversal raises
    KeyboardInterrupt at once; it is only recorded while output is being written
    (see :func:`recording_interrupts`).
    """
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal_handler.handle_sigpipe)


@contextmanager
def recording_interrupts() -> Iterator[None]:
    """Record Ctrl+C instead of raising while the block runs, so output stops between lines."""
    previous = signal.signal(signal.SIGINT, signal_handler.handle_sigint)
    try:
        yield
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


def _silence_stdout() -> None:
    # Prevents "Exception ignored ... BrokenPipeError" noise while the interpreter shuts down.
    if signal_handler.interrupted:
        try:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        except (OSError, ValueError):
            pass


atexit.register(_silence_stdout)


class SafeWriter:
    """Write output lines, converting closed pipes and interruptions into BrokenPipeError.

    Attributes:
        stream (TextIO): Destination, standard output by default.

    Example:
        >>> with SafeWriter() as writer:  # doctest: +SKIP
        ...     writer.write_lines(["a", "b"])
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def write(self, data: str) -> None:
        """Write a chunk of text.

        Raises:
            BrokenPipeError: If the reader went away or the user interrupted.
        """
        if signal_handler.interrupted:
            raise BrokenPipeError()
        try:
            self.stream.write(data)
        except OSError as e:
            if e.errno == errno.EPIPE:
                signal_handler.sigpipe_received.set()
                raise BrokenPipeError()
            raise

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line + "\n")

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:  # type: ignore
        try:
            self.stream.flush()
        except OSError as e:
            if e.errno != errno.EPIPE:
                raise
            signal_handler.sigpipe_received.set()
        # Broken pipes end the output quietly; the exit code reports them.
        return exc_type is not None and issubclass(exc_type, BrokenPipeError)
