"""Observability Module - Logging, Tracing, and Metrics

This module provides:
1. Process-wide logging format
2. Flow execution tracing
3. Per-flow latency and outcome metrics for the /api/metrics endpoint
"""
import logging
import functools
import threading
from typing import Dict, Any, Optional, Callable
from dataclasses import dataclass, field
from datetime import datetime

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("nuskha")


@dataclass
class FlowTrace:
    """A single flow execution."""
    flow_name: str
    start_time: datetime = field(default_factory=datetime.now)
    duration_ms: Optional[float] = None
    input_summary: str = ""
    success: bool = True
    used_fallback: bool = False
    error: Optional[str] = None

    def complete(self, success: bool = True, error: str = None):
        self.duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        self.success = success
        self.error = error


@dataclass
class FlowMetrics:
    """Aggregated metrics across all flow executions."""
    total_runs: int = 0
    successful_runs: int = 0
    failed_runs: int = 0
    fallback_runs: int = 0
    total_latency_ms: float = 0
    flow_run_counts: Dict[str, int] = field(default_factory=dict)
    flow_latency_totals: Dict[str, float] = field(default_factory=dict)
    flow_failures: Dict[str, int] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def success_rate(self) -> float:
        if self.total_runs == 0:
            return 0.0
        return self.successful_runs / self.total_runs

    @property
    def avg_latency_ms(self) -> float:
        if self.total_runs == 0:
            return 0.0
        return self.total_latency_ms / self.total_runs

    def record(self, trace: FlowTrace):
        # Flows run in worker threads, so updates must be serialized
        with self._lock:
            self.total_runs += 1
            if trace.success:
                self.successful_runs += 1
            else:
                self.failed_runs += 1
                self.flow_failures[trace.flow_name] = self.flow_failures.get(trace.flow_name, 0) + 1
            if trace.used_fallback:
                self.fallback_runs += 1

            if trace.duration_ms is not None:
                self.total_latency_ms += trace.duration_ms
                # Running totals only; the server is long-lived
                self.flow_run_counts[trace.flow_name] = self.flow_run_counts.get(trace.flow_name, 0) + 1
                self.flow_latency_totals[trace.flow_name] = (
                    self.flow_latency_totals.get(trace.flow_name, 0.0) + trace.duration_ms
                )

    def reset(self):
        with self._lock:
            self.total_runs = 0
            self.successful_runs = 0
            self.failed_runs = 0
            self.fallback_runs = 0
            self.total_latency_ms = 0
            self.flow_run_counts = {}
            self.flow_latency_totals = {}
            self.flow_failures = {}

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            flow_avg = {
                name: round(total / self.flow_run_counts[name], 1)
                for name, total in self.flow_latency_totals.items()
                if self.flow_run_counts.get(name)
            }
            return {
                "total_runs": self.total_runs,
                "success_rate": f"{self.success_rate:.1%}",
                "fallback_runs": self.fallback_runs,
                "avg_latency_ms": f"{self.avg_latency_ms:.0f}ms",
                "flow_avg_latency_ms": flow_avg,
                "flow_failures": dict(self.flow_failures),
            }


# Global metrics instance
metrics = FlowMetrics()

# Trace of the flow running on the current thread
_active = threading.local()


class Tracer:
    """Context manager for tracing a flow execution."""

    def __init__(self, flow_name: str, input_data: Any = None):
        self.trace = FlowTrace(flow_name=flow_name)
        self._outer = None
        if input_data is not None:
            self.trace.input_summary = _summarize(input_data)

    def __enter__(self):
        logger.info(f"▶ {self.trace.flow_name} started")
        self._outer = getattr(_active, "trace", None)
        _active.trace = self.trace
        return self.trace

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.trace.complete(success=False, error=str(exc_val))
            logger.error(f"✖ {self.trace.flow_name} failed: {exc_val}")
        else:
            self.trace.complete(success=True)
            suffix = " (fallback)" if self.trace.used_fallback else ""
            logger.info(f"✔ {self.trace.flow_name} completed in {self.trace.duration_ms:.0f}ms{suffix}")

        _active.trace = self._outer
        metrics.record(self.trace)
        return False  # Don't suppress exceptions


def trace_flow(func: Callable) -> Callable:
    """Decorator that traces a flow's run method under the flow's name."""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        flow_name = getattr(self, "name", self.__class__.__name__)
        with Tracer(flow_name, args[0] if args else None):
            return func(self, *args, **kwargs)
    return wrapper


def mark_fallback():
    """Flag the flow running on this thread as having answered from its fallback."""
    trace = getattr(_active, "trace", None)
    if trace is not None:
        trace.used_fallback = True


def _summarize(data: Any) -> str:
    """Short, media-free description of a flow input for the trace."""
    if hasattr(data, "model_dump"):
        data = data.model_dump()
    if isinstance(data, dict):
        parts = []
        for key, value in data.items():
            if isinstance(value, str) and value.startswith("data:"):
                value = value.split(";", 1)[0] + ";base64,..."
            parts.append(f"{key}={value}")
        return ", ".join(parts)[:200]
    if isinstance(data, str) and data.startswith("data:"):
        return data.split(";", 1)[0] + ";base64,..."
    return str(data)[:200]


def get_metrics_summary() -> Dict[str, Any]:
    """Get current metrics summary for the API."""
    return metrics.summary()
