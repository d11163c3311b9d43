"""Developer tools for shorthand expression parsing."""

from .debugging import format_node, format_tree
from .profiling import ParseProfiler, ProfilingSession, StagePerformance

__all__ = [
    "ParseProfiler",
    "ProfilingSession",
    "StagePerformance",
    "format_node",
    "format_tree",
]
