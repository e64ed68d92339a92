from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .models import Policy, Process, ProcessMetrics, ScheduledSlice, SimulationResult

logger = logging.getLogger(__name__)


def derive(
    processes: Sequence[Process],
    timeline: Sequence[ScheduledSlice],
    policy: Optional[Policy] = None,
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Build the per-process and system metrics for a finished timeline.

    First dispatch and completion are read off the timeline in a single pass.
    A process that never appears gets a completion time of 0; waiting,
    turnaround and response times are floored at 0 so that degenerate case
    still yields non-negative numbers.
    """
    first_start: Dict[str, int] = {}
    completion: Dict[str, int] = {}
    busy_time = 0

    for slice_ in timeline:
        if slice_.is_idle:
            continue
        busy_time += slice_.duration
        pid = slice_.pid
        if pid not in first_start or slice_.start_time < first_start[pid]:
            first_start[pid] = slice_.start_time
        if pid not in completion or slice_.end_time > completion[pid]:
            completion[pid] = slice_.end_time

    metrics: List[ProcessMetrics] = []
    for p in processes:
        if p.pid not in completion:
            logger.debug("process %s never ran; using zeroed metrics", p.pid)
        completion_time = completion.get(p.pid, 0)
        start_time = first_start.get(p.pid, 0)
        turnaround_time = max(0, completion_time - p.arrival_time)
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                priority=p.priority,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=max(0, turnaround_time - p.burst_time),
                turnaround_time=turnaround_time,
                response_time=max(0, start_time - p.arrival_time),
            )
        )

    metrics.sort(key=lambda m: m.pid)

    total_time = timeline[-1].end_time if timeline else 0
    summary = summarize_process_metrics(metrics)

    result = SimulationResult(
        timeline=tuple(timeline),
        processes=tuple(metrics),
        average_waiting_time=summary["avg_waiting"],
        average_turnaround_time=summary["avg_turnaround"],
        average_response_time=summary["avg_response"],
        cpu_utilization=100 * busy_time / total_time if total_time > 0 else 0.0,
        total_time=total_time,
        busy_time=busy_time,
        throughput=len(metrics) / total_time if total_time > 0 else 0.0,
        policy=policy,
        quantum=quantum,
    )
    logger.debug(
        "derived metrics for %d processes: total=%d busy=%d utilization=%.1f%%",
        len(metrics),
        total_time,
        busy_time,
        result.cpu_utilization,
    )
    return result


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
