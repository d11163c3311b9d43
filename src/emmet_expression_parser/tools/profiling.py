"""Performance profiling tools for shorthand expression parsing.

Times the tokenize and build stages separately over repeated runs and samples
the resident set size of the process before and after each stage.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from emmet_expression_parser.api import ExpressionParser
from emmet_expression_parser.shared import ParserConfig, get_logger


@dataclass
class StagePerformance:
    """Performance metrics for one processing stage of one run."""

    stage_name: str
    start_time: float
    end_time: float
    memory_start: int  # bytes
    memory_end: int  # bytes

    @property
    def duration_ms(self) -> float:
        """Processing duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start


@dataclass
class ProfilingSession:
    """All stage measurements for one expression."""

    session_id: str
    expression: str
    iterations: int
    stages: List[StagePerformance] = field(default_factory=list)

    def stage_durations(self, stage_name: str) -> List[float]:
        """Durations of every run of ``stage_name`` in milliseconds."""
        return [stage.duration_ms for stage in self.stages if stage.stage_name == stage_name]

    def average_duration_ms(self, stage_name: str) -> float:
        """Average duration of ``stage_name`` across iterations."""
        durations = self.stage_durations(stage_name)
        if not durations:
            return 0.0
        return sum(durations) / len(durations)

    @property
    def peak_memory(self) -> int:
        """Highest RSS sampled during the session, in bytes."""
        if not self.stages:
            return 0
        return max(max(stage.memory_start, stage.memory_end) for stage in self.stages)

    def summary(self) -> Dict[str, Any]:
        """Summarize the session as plain data."""
        return {
            "session_id": self.session_id,
            "expression_length": len(self.expression),
            "iterations": self.iterations,
            "tokenize_ms": self.average_duration_ms("tokenize"),
            "build_ms": self.average_duration_ms("build"),
            "peak_memory": self.peak_memory,
        }


class ParseProfiler:
    """Profiles parsing of expressions stage by stage.

    Examples:
        >>> profiler = ParseProfiler()
        >>> session = profiler.profile("ul>li+li", iterations=5)  # doctest: +SKIP
        >>> session.average_duration_ms("build")  # doctest: +SKIP
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        enable_memory_tracking: bool = True
    ) -> None:
        self.parser = ExpressionParser(config)
        self.enable_memory_tracking = enable_memory_tracking
        self.process = psutil.Process() if enable_memory_tracking else None
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, None, "parse_profiler")

    def profile(
        self,
        expression: str,
        iterations: int = 10,
        session_id: Optional[str] = None
    ) -> ProfilingSession:
        """Tokenize and build ``expression`` ``iterations`` times.

        Raises:
            ValueError: If ``iterations`` is not positive
            ExpressionParseError: If the expression is rejected
        """
        if iterations <= 0:
            raise ValueError("iterations must be > 0")

        session = ProfilingSession(
            session_id=session_id or f"session-{len(self.sessions) + 1}",
            expression=expression,
            iterations=iterations,
        )
        for _ in range(iterations):
            start = self._stage_start("tokenize")
            tokenization = self.parser.tokenize(expression)
            session.stages.append(self._stage_end(start))

            start = self._stage_start("build")
            self.parser.tree_builder.build(tokenization)
            session.stages.append(self._stage_end(start))

        self.sessions.append(session)
        self.logger.info("Profiling session completed", extra=session.summary())
        return session

    def clear_sessions(self) -> None:
        """Discard all recorded sessions."""
        self.sessions.clear()

    def _memory(self) -> int:
        if self.process is None:
            return 0
        return self.process.memory_info().rss

    def _stage_start(self, stage_name: str) -> StagePerformance:
        return StagePerformance(
            stage_name=stage_name,
            start_time=time.perf_counter(),
            end_time=0.0,
            memory_start=self._memory(),
            memory_end=0,
        )

    def _stage_end(self, stage: StagePerformance) -> StagePerformance:
        stage.end_time = time.perf_counter()
        stage.memory_end = self._memory()
        return stage
