from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import UnsupportedPolicy

DEFAULT_QUANTUM = 2


class Policy(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"
    ROUND_ROBIN = "rr"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, token) -> "Policy":
        """
        Accept a Policy or a case-insensitive token such as "FCFS",
        "Priority", "rr" or "RoundRobin".
        """
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            key = token.strip().lower().replace("-", "").replace("_", "")
            if key in _ALIASES:
                return _ALIASES[key]
        raise UnsupportedPolicy(token)


_LABELS = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF (non-preemptive)",
    Policy.PRIORITY: "Priority (non-preemptive)",
    Policy.ROUND_ROBIN: "Round Robin",
}

_ALIASES = {
    "fcfs": Policy.FCFS,
    "sjf": Policy.SJF,
    "priority": Policy.PRIORITY,
    "rr": Policy.ROUND_ROBIN,
    "roundrobin": Policy.ROUND_ROBIN,
}


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    # Caller-assigned, strictly increasing; final tie-breaker for every policy.
    insertion_order: int = 0


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of the Gantt chart. ``pid`` is None while the CPU
    sits idle.
    """

    pid: Optional[str]
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass(frozen=True)
class SimulationResult:
    timeline: Tuple[ScheduledSlice, ...] = ()
    processes: Tuple[ProcessMetrics, ...] = ()
    average_waiting_time: float = 0.0
    average_turnaround_time: float = 0.0
    average_response_time: float = 0.0
    cpu_utilization: float = 0.0
    total_time: int = 0
    busy_time: int = 0
    throughput: float = 0.0
    policy: Optional[Policy] = None
    quantum: Optional[int] = None

    @property
    def algorithm(self) -> str:
        return self.policy.label if self.policy is not None else "custom"
