"""
CPU scheduling simulator.

Replays FCFS, SJF, Priority and Round Robin scheduling over a known set of
processes and reports the resulting Gantt chart and timing metrics.
"""

from .algorithms import run, simulate
from .errors import DuplicateProcessId, InvalidQuantum, SchedulerError, UnsupportedPolicy, WorkloadError
from .examples import example_processes
from .metrics import derive
from .models import DEFAULT_QUANTUM, Policy, Process, ProcessMetrics, ScheduledSlice, SimulationResult
from .validation import ValidationResult, validate

__all__ = [
    "DEFAULT_QUANTUM",
    "DuplicateProcessId",
    "InvalidQuantum",
    "Policy",
    "Process",
    "ProcessMetrics",
    "ScheduledSlice",
    "SchedulerError",
    "SimulationResult",
    "UnsupportedPolicy",
    "ValidationResult",
    "WorkloadError",
    "derive",
    "example_processes",
    "run",
    "simulate",
    "validate",
]
