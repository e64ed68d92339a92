from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, is_dataclass
from typing import Iterable, List, Mapping, Tuple

from .models import Process

PID_REQUIRED = "Process ID is required"
ARRIVAL_INVALID = "Arrival time must be >= 0"
BURST_INVALID = "Burst time must be > 0"
PRIORITY_INVALID = "Priority must be >= 0"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[str, ...] = ()


def _int_field(candidate: Mapping, name: str):
    value = candidate.get(name)
    # bool is an int subclass but never a meaningful time or priority
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def validate(candidate) -> ValidationResult:
    """
    Check a single (possibly partial) process description.

    Every rule is checked independently so a caller can show all problems
    at once. ``candidate`` may be a mapping with the Process field names or
    a Process instance.
    """
    if is_dataclass(candidate) and not isinstance(candidate, type):
        candidate = asdict(candidate)

    errors: List[str] = []

    pid = candidate.get("pid")
    if not isinstance(pid, str) or not pid.strip():
        errors.append(PID_REQUIRED)

    arrival_time = _int_field(candidate, "arrival_time")
    if arrival_time is None or arrival_time < 0:
        errors.append(ARRIVAL_INVALID)

    burst_time = _int_field(candidate, "burst_time")
    if burst_time is None or burst_time <= 0:
        errors.append(BURST_INVALID)

    priority = _int_field(candidate, "priority")
    if priority is None or priority < 0:
        errors.append(PRIORITY_INVALID)

    return ValidationResult(valid=not errors, errors=tuple(errors))


def find_duplicate_pids(processes: Iterable[Process]) -> List[str]:
    """
    Return the pids used by more than one process, in first-seen order.
    """
    counts = Counter(p.pid for p in processes)
    return [pid for pid, n in counts.items() if n > 1]
