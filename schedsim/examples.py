from __future__ import annotations

from typing import List

from .models import Process


def example_processes() -> List[Process]:
    """
    Small hand-picked workload for demos and tests.
    """
    return [
        Process("P1", arrival_time=0, burst_time=5, priority=2, insertion_order=0),
        Process("P2", arrival_time=1, burst_time=3, priority=1, insertion_order=1),
        Process("P3", arrival_time=2, burst_time=8, priority=4, insertion_order=2),
        Process("P4", arrival_time=3, burst_time=6, priority=3, insertion_order=3),
        Process("P5", arrival_time=4, burst_time=4, priority=2, insertion_order=4),
    ]
