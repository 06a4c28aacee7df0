"""Performance profiling utilities for AVL tree operations."""

import time
import functools
from typing import Dict, List, Callable, Optional
from dataclasses import dataclass, field
import statistics
from collections import Counter, defaultdict

ROTATION_KINDS = (
    "single_left",
    "single_right",
    "double_left_right",
    "double_right_left",
)


@dataclass
class OperationMetrics:
    """Timing statistics for a single tree operation."""
    call_count: int = 0
    total_time: float = 0.0
    max_time: float = 0.0
    times: List[float] = field(default_factory=list)

    def add_measurement(self, elapsed: float) -> None:
        self.call_count += 1
        self.total_time += elapsed
        self.max_time = max(self.max_time, elapsed)
        self.times.append(elapsed)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count > 0 else 0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0


class PerformanceTracker:
    """
    Central collector for AVL tree operation timings and rotation counts.

    Tracking is off until enable() is called so that ordinary use of the
    tree pays only for a flag check.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, OperationMetrics] = defaultdict(OperationMetrics)
        self.rotations: Counter = Counter()
        self.enabled = False

    def add_measurement(self, operation: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[operation].add_measurement(elapsed)

    def record_rotation(self, kind: str) -> None:
        """Count one rebalancing rotation of the given kind."""
        if self.enabled:
            self.rotations[kind] += 1

    @property
    def rotation_count(self) -> int:
        return sum(self.rotations.values())

    def reset(self) -> None:
        """Clear all measurements and rotation counts."""
        self.metrics.clear()
        self.rotations.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """Generate a performance report of operations and rotations."""
        if not self.metrics and not self.rotations:
            return "No performance data collected."

        lines = ["Performance Metrics:"]
        lines.append("-" * 80)
        lines.append(f"{'Operation':<32} {'Calls':>8} {'Total (s)':>12} "
                     f"{'Avg (s)':>12} {'Median (s)':>12}")
        lines.append("-" * 80)

        sorted_items = sorted(
            self.metrics.items(),
            key=lambda x: getattr(x[1], sort_by),
            reverse=True
        )
        for name, metrics in sorted_items:
            lines.append(f"{name:<32} {metrics.call_count:>8} {metrics.total_time:>12.6f} "
                         f"{metrics.avg_time:>12.6f} {metrics.median_time:>12.6f}")

        lines.append("-" * 80)
        lines.append("Rotations:")
        for kind in ROTATION_KINDS:
            lines.append(f"  {kind:<30} {self.rotations.get(kind, 0):>8}")
        lines.append(f"  {'total':<30} {self.rotation_count:>8}")

        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator recording the execution time of a tree operation.

    Args:
        method: The method to track
        tag: Optional name to record instead of the method's qualified name

    Returns:
        The decorated method
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)

            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.add_measurement(name, time.perf_counter() - start_time)
        return wrapper

    # Handle both @track_performance and @track_performance(tag="name") forms
    if method is None:
        return decorator
    return decorator(method)
