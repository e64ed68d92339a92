from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Sequence

from .errors import DuplicateProcessId, InvalidQuantum
from .metrics import derive
from .models import DEFAULT_QUANTUM, Policy, Process, ScheduledSlice, SimulationResult
from .validation import find_duplicate_pids

logger = logging.getLogger(__name__)


def _arrival_key(p: Process):
    return (p.arrival_time, p.insertion_order)


def _sjf_key(p: Process):
    return (p.burst_time, p.arrival_time, p.insertion_order)


def _priority_key(p: Process):
    return (p.priority, p.arrival_time, p.insertion_order)


def schedule_fcfs(processes: Sequence[Process]) -> List[ScheduledSlice]:
    """
    First-Come First-Serve (non-preemptive).

    Since only arrival order matters, one global sort gives the same result
    as re-checking the ready set at every decision point.
    """
    time = 0
    timeline: List[ScheduledSlice] = []

    for p in sorted(processes, key=_arrival_key):
        if time < p.arrival_time:
            timeline.append(ScheduledSlice(pid=None, start_time=time, end_time=p.arrival_time))
            time = p.arrival_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + p.burst_time))
        time += p.burst_time

    return timeline


def _schedule_non_preemptive(
    processes: Sequence[Process], key: Callable[[Process], tuple]
) -> List[ScheduledSlice]:
    # Removal is by position in our own list, never by pid or burst value,
    # so equal keys elsewhere in the pool are left alone.
    remaining: List[Process] = list(processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    while remaining:
        ready = [i for i, p in enumerate(remaining) if p.arrival_time <= time]

        if not ready:
            next_arrival = min(p.arrival_time for p in remaining)
            timeline.append(ScheduledSlice(pid=None, start_time=time, end_time=next_arrival))
            time = next_arrival
            continue

        chosen = min(ready, key=lambda i: key(remaining[i]))
        p = remaining.pop(chosen)

        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + p.burst_time))
        time += p.burst_time

    return timeline


def schedule_sjf(processes: Sequence[Process]) -> List[ScheduledSlice]:
    """
    Shortest Job First (non-preemptive).

    Among processes that have arrived, pick the smallest burst time; ties go
    to the earlier arrival, then to the earlier insertion.
    """
    return _schedule_non_preemptive(processes, _sjf_key)


def schedule_priority(processes: Sequence[Process]) -> List[ScheduledSlice]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Ties are broken by
    earlier arrival time, then insertion order.
    """
    return _schedule_non_preemptive(processes, _priority_key)


def schedule_rr(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> List[ScheduledSlice]:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs join the ready queue before the
    preempted process goes to the back of it.
    """
    if quantum is None or quantum < 1:
        raise InvalidQuantum(f"Round Robin requires a positive quantum, got {quantum!r}")

    ordered = sorted(processes, key=_arrival_key)
    # Remaining burst per process, indexed by position in `ordered`.
    remaining = [p.burst_time for p in ordered]

    time = 0
    timeline: List[ScheduledSlice] = []
    ready: Deque[int] = deque()
    next_index = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_index
        while next_index < len(ordered) and ordered[next_index].arrival_time <= current_time:
            ready.append(next_index)
            next_index += 1

    enqueue_new_arrivals(time)

    while ready or next_index < len(ordered):
        if not ready:
            next_arrival = ordered[next_index].arrival_time
            timeline.append(ScheduledSlice(pid=None, start_time=time, end_time=next_arrival))
            time = next_arrival
            enqueue_new_arrivals(time)
            continue

        idx = ready.popleft()
        run_time = min(quantum, remaining[idx])
        timeline.append(ScheduledSlice(pid=ordered[idx].pid, start_time=time, end_time=time + run_time))

        time += run_time
        remaining[idx] -= run_time

        enqueue_new_arrivals(time)

        if remaining[idx] > 0:
            ready.append(idx)

    return timeline


def run(
    processes: Sequence[Process],
    policy,
    quantum: int = DEFAULT_QUANTUM,
) -> List[ScheduledSlice]:
    """
    Produce the timeline for ``processes`` under ``policy``.

    ``policy`` is a Policy or a token accepted by Policy.parse; anything else
    raises UnsupportedPolicy before any scheduling happens. ``quantum`` is
    only used by Round Robin.
    """
    policy = Policy.parse(policy)

    duplicates = find_duplicate_pids(processes)
    if duplicates:
        raise DuplicateProcessId(duplicates)

    if not processes:
        return []

    logger.debug("scheduling %d processes with %s", len(processes), policy.label)

    if policy is Policy.FCFS:
        timeline = schedule_fcfs(processes)
    elif policy is Policy.SJF:
        timeline = schedule_sjf(processes)
    elif policy is Policy.PRIORITY:
        timeline = schedule_priority(processes)
    else:
        timeline = schedule_rr(processes, quantum=quantum)

    logger.debug("%s produced %d slices", policy.label, len(timeline))
    return timeline


def simulate(
    processes: Sequence[Process],
    policy,
    quantum: int = DEFAULT_QUANTUM,
) -> SimulationResult:
    """
    Run a policy and derive its metrics in one call.
    """
    policy = Policy.parse(policy)
    timeline = run(processes, policy, quantum=quantum)
    return derive(
        processes,
        timeline,
        policy=policy,
        quantum=quantum if policy is Policy.ROUND_ROBIN else None,
    )
