"""
Timestamped console output for the vsconfig CLI.

Every line is prefixed with the time since init_timer() in MM:SS.cc
format:

    00:00.01 vsconfig v0.3.0
    00:00.02 [1/3] Loading build model...
    00:00.03       12 binaries, 3 toolchain definitions
    00:00.41 [2/3] Extracting toolchains...

Library modules log through the logging module; only the CLI writes here.
"""

import sys
import time
from types import TracebackType
from typing import Optional, TextIO

_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = False


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Start the timer and select the output stream.

    Args:
        output_stream: Stream to write to (None writes to the current sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """Enable or disable verbose_only details."""
    global _verbose
    _verbose = verbose


def format_timestamp() -> str:
    """Format the time since init_timer() as MM:SS.cc."""
    if _start_time is None:
        init_timer()
    elapsed = time.time() - _start_time  # type: ignore[operator]
    minutes, seconds = divmod(elapsed, 60)
    return f"{int(minutes):02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(f"{format_timestamp()} {message}\n")
    stream.flush()


def log_header(title: str, version: str) -> None:
    _print(f"{title} v{version}")


def log_phase(phase: int, total: int, message: str) -> None:
    """Log a phase message formatted as [N/M] message."""
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log an indented detail line under the current phase.

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: Only print when verbose output is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


class TimedLogger:
    """
    Context manager announcing a phase and, in verbose mode, its duration.

    Usage:
        with TimedLogger("Extracting toolchains", phase=(2, 3)) as timed:
            records = extract(context)
            timed.detail(f"{len(records)} toolchain(s)")
    """

    def __init__(self, operation: str, phase: tuple[int, int]):
        self.operation = operation
        self.phase = phase
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        log_phase(self.phase[0], self.phase[1], f"{self.operation}...")
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        if exc_type is None:
            log_detail(f"Done ({time.time() - self.start_time:.2f}s)", verbose_only=True)

    def detail(self, message: str) -> None:
        log_detail(message)
