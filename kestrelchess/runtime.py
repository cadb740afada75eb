"""Process-level helpers: engine identification, debug statistics, command line paths."""

from __future__ import annotations

import datetime
import os
import threading
from dataclasses import dataclass, field

__all__ = ["VERSION", "ENGINE_NAME", "DebugStats", "CommandLine", "engine_info"]

ENGINE_NAME = "Kestrel"

# When empty, engine_info() shows the current date as DDMMYY instead.
VERSION = ""


def engine_info(to_uci: bool = False) -> str:
    """Full engine name, with an "id author" line when meant for the UCI handshake."""
    if VERSION:
        name = f"{ENGINE_NAME} {VERSION}"
    else:
        today = datetime.date.today()
        name = f"{ENGINE_NAME} {today.day:02d}{today.month:02d}{today.year % 100:02d}"
    separator = "\nid author " if to_uci else " by "
    return f"{name}{separator}the {ENGINE_NAME} developers"


@dataclass
class DebugStats:
    """Thread-safe counters for hit rates and running means collected while debugging."""

    hits_total: int = 0
    hits: int = 0
    means_count: int = 0
    means_sum: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def hit_on(self, b: bool, condition: bool = True) -> None:
        """Count one event, and a hit if b is true; ignored when condition is false."""
        if not condition:
            return
        with self._lock:
            self.hits_total += 1
            if b:
                self.hits += 1

    def mean_of(self, v: int) -> None:
        """Add a value to the running mean."""
        with self._lock:
            self.means_count += 1
            self.means_sum += v

    def report(self) -> str:
        """Summary lines of the collected statistics, empty if nothing was collected."""
        with self._lock:
            lines = []
            if self.hits_total:
                rate = 100 * self.hits // self.hits_total
                lines.append(
                    f"Total {self.hits_total} Hits {self.hits} hit rate (%) {rate}"
                )
            if self.means_count:
                mean = self.means_sum / self.means_count
                lines.append(f"Total {self.means_count} Mean {mean:g}")
        return "\n".join(lines)


def _path_separator() -> str:
    return "\\" if os.name == "nt" else "/"


@dataclass(frozen=True)
class CommandLine:
    """Paths derived from the program name and the working directory."""

    argv0: str
    binary_directory: str
    working_directory: str

    @classmethod
    def from_argv0(cls, argv0: str, working_directory: str | None = None) -> "CommandLine":
        """Work out the executable's directory from argv[0].

        A bare program name gives "./"; a leading "./" is replaced by the
        working directory, which defaults to the current one.
        """
        if working_directory is None:
            try:
                working_directory = os.getcwd()
            except OSError:
                working_directory = ""
        sep = _path_separator()

        pos = max(argv0.rfind("\\"), argv0.rfind("/"))
        binary_directory = "." + sep if pos < 0 else argv0[: pos + 1]

        if binary_directory.startswith("." + sep):
            binary_directory = working_directory + binary_directory[1:]

        return cls(
            argv0=argv0,
            binary_directory=binary_directory,
            working_directory=working_directory,
        )