"""Tab-separated progress logger for the nearest-facility pipeline."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterator, TextIO

if TYPE_CHECKING:
    from helproute.graph.model import Graph
    from helproute.search.nearest import NearestResult


class LoggingMode(str, Enum):
    """Supported logging verbosity for the locate pipeline."""

    NONE = "none"
    INFO = "info"
    DEBUG = "debug"

    @classmethod
    def from_value(cls, value: LoggingMode | str | None) -> LoggingMode:
        """Normalize arbitrary user input into a `LoggingMode`."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        try:
            return cls(value.lower())
        except ValueError as exc:
            valid = ", ".join(mode.value for mode in cls)
            msg = f"Invalid logging mode: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc


@dataclass(slots=True)
class Logger:
    """Emit deterministic `[LEVEL]\\tevent\\tkey=value` lines for each phase."""

    mode: LoggingMode = LoggingMode.NONE
    stream: TextIO | None = field(default=None, repr=False)

    @property
    def is_info_enabled(self) -> bool:  # noqa: D102
        return self.mode in (LoggingMode.INFO, LoggingMode.DEBUG)

    @property
    def is_debug_enabled(self) -> bool:  # noqa: D102
        return self.mode is LoggingMode.DEBUG

    def info(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_info_enabled:
            self._emit("INFO", message, context)

    def debug(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_debug_enabled:
            self._emit("DEBUG", message, context)

    def graph_stats(self, graph: Graph) -> None:
        """Log the size of a freshly built routing graph."""
        if not self.is_info_enabled:
            return
        self.info("graph.stats", nodes=len(graph), edges=graph.number_of_edges())
        if self.is_debug_enabled:
            for node_id, edges in graph.adjacency().items():
                self.debug("graph.node", node=node_id, degree=len(edges))

    def nearest(self, result: NearestResult) -> None:
        """Log the winning facility and its path cost."""
        self.info(
            "nearest.selected",
            facility=result.best_id,
            distance=f"{result.total_distance:.1f}",
            hops=max(len(result.best_result.path) - 1, 0),
        )

    @contextmanager
    def phase(self, name: str, **details: Any) -> Iterator[None]:  # noqa: ANN401
        """Emit start/complete (or failed) messages around a logical phase."""
        if not self.is_info_enabled:
            yield
            return

        self.info(f"{name}.start", **details)
        start = perf_counter()
        try:
            yield
        except Exception as exc:
            self.info(f"{name}.failed", error=str(exc))
            raise
        else:
            self.info(f"{name}.complete", **details)
            if self.is_debug_enabled:
                elapsed = perf_counter() - start
                self.debug(f"{name}.elapsed", seconds=f"{elapsed:.3f}")

    def _emit(self, level: str, message: str, context: dict[str, Any]) -> None:
        parts = [f"[{level}]\t{message}"]
        extras = "\t".join(
            f"{key}={value}" for key, value in context.items() if value is not None
        )
        if extras:
            parts.append(extras)
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write("\t".join(parts) + "\n")
