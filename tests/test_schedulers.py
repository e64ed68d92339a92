import pytest

from schedsim.algorithms import (
    run,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
    simulate,
)
from schedsim.errors import DuplicateProcessId, InvalidQuantum, UnsupportedPolicy
from schedsim.examples import example_processes
from schedsim.models import Policy, Process, ScheduledSlice


def _procs(*specs):
    """Build processes from (pid, arrival, burst[, priority]) tuples in insertion order."""
    out = []
    for order, spec in enumerate(specs):
        pid, arrival, burst = spec[:3]
        priority = spec[3] if len(spec) > 3 else 1
        out.append(Process(pid, arrival_time=arrival, burst_time=burst, priority=priority, insertion_order=order))
    return out


def _segments(timeline):
    return [(s.pid, s.start_time, s.end_time) for s in timeline]


def test_fcfs_order():
    timeline = run(_procs(("P1", 0, 5), ("P2", 2, 3), ("P3", 4, 2)), "FCFS")
    assert _segments(timeline) == [("P1", 0, 5), ("P2", 5, 8), ("P3", 8, 10)]


def test_fcfs_idle_before_first_arrival():
    timeline = run(_procs(("P1", 3, 4)), Policy.FCFS)
    assert _segments(timeline) == [(None, 0, 3), ("P1", 3, 7)]
    assert timeline[0].is_idle


def test_fcfs_same_arrival_uses_insertion_order():
    procs = _procs(("P1", 0, 3), ("P2", 0, 2), ("P3", 0, 4))
    assert [s.pid for s in schedule_fcfs(procs)] == ["P1", "P2", "P3"]


def test_fcfs_insertion_order_not_list_order():
    procs = [
        Process("B", arrival_time=0, burst_time=2, priority=0, insertion_order=1),
        Process("A", arrival_time=0, burst_time=2, priority=0, insertion_order=0),
    ]
    assert [s.pid for s in schedule_fcfs(procs)] == ["A", "B"]


def test_sjf_picks_shortest_ready_job():
    timeline = run(_procs(("P1", 0, 7), ("P2", 0, 4), ("P3", 0, 1)), "SJF")
    assert _segments(timeline) == [("P3", 0, 1), ("P2", 1, 5), ("P1", 5, 12)]


def test_sjf_only_considers_arrived_processes():
    timeline = schedule_sjf(_procs(("P1", 0, 7), ("P2", 2, 3), ("P3", 5, 1)))
    # P3 is shortest but has not arrived at t=0
    assert _segments(timeline) == [("P1", 0, 7), ("P3", 7, 8), ("P2", 8, 11)]


def test_sjf_tie_breaks_on_arrival_then_insertion():
    assert [s.pid for s in schedule_sjf(_procs(("P1", 0, 3), ("P2", 0, 3)))] == ["P1", "P2"]
    # Equal bursts, both ready at t=4: earlier arrival wins over insertion order
    procs = _procs(("P0", 0, 4), ("P1", 3, 2), ("P2", 1, 2))
    assert [s.pid for s in schedule_sjf(procs)] == ["P0", "P2", "P1"]


def test_sjf_idle_between_jobs():
    timeline = schedule_sjf(_procs(("P1", 0, 2), ("P2", 6, 1)))
    assert _segments(timeline) == [("P1", 0, 2), (None, 2, 6), ("P2", 6, 7)]


def test_priority_lowest_number_wins():
    procs = _procs(("P1", 0, 4, 3), ("P2", 0, 3, 1), ("P3", 0, 5, 2))
    assert _segments(run(procs, "Priority")) == [("P2", 0, 3), ("P3", 3, 8), ("P1", 8, 12)]


def test_priority_tie_breaks_on_arrival():
    procs = _procs(("P1", 2, 3, 1), ("P2", 0, 4, 1))
    assert schedule_priority(procs)[0].pid == "P2"


def test_priority_is_non_preemptive():
    procs = _procs(("P1", 0, 5, 3), ("P2", 1, 2, 0))
    assert _segments(schedule_priority(procs)) == [("P1", 0, 5), ("P2", 5, 7)]


def test_priority_handles_idle():
    assert _segments(run(_procs(("P1", 5, 3)), "priority")) == [(None, 0, 5), ("P1", 5, 8)]


def test_rr_quantum_slicing():
    result = simulate(_procs(("P1", 0, 5), ("P2", 0, 3)), "RoundRobin", quantum=2)
    assert _segments(result.timeline) == [
        ("P1", 0, 2),
        ("P2", 2, 4),
        ("P1", 4, 6),
        ("P2", 6, 7),
        ("P1", 7, 8),
    ]
    response = {m.pid: m.response_time for m in result.processes}
    assert response == {"P1": 0, "P2": 2}


def test_rr_short_job_finishes_inside_quantum():
    assert _segments(schedule_rr(_procs(("P1", 0, 3)), quantum=5)) == [("P1", 0, 3)]


def test_rr_large_quantum_behaves_like_fcfs():
    procs = _procs(("P1", 0, 2), ("P2", 0, 3))
    assert _segments(schedule_rr(procs, quantum=10)) == [("P1", 0, 2), ("P2", 2, 5)]


def test_rr_arrival_during_slice():
    timeline = schedule_rr(_procs(("P1", 0, 4), ("P2", 1, 2)), quantum=2)
    assert _segments(timeline) == [("P1", 0, 2), ("P2", 2, 4), ("P1", 4, 6)]


def test_rr_new_arrival_queued_before_preempted_process():
    # P3 arrives exactly when P1's first slice ends: it must run before P1 again
    procs = _procs(("P1", 0, 4), ("P2", 0, 2), ("P3", 2, 2))
    timeline = schedule_rr(procs, quantum=2)
    assert _segments(timeline) == [("P1", 0, 2), ("P2", 2, 4), ("P3", 4, 6), ("P1", 6, 8)]


def test_rr_same_instant_arrival_beats_requeue():
    procs = _procs(("P1", 0, 3), ("P2", 1, 1))
    timeline = schedule_rr(procs, quantum=1)
    # At t=1 P2 arrives and P1 is preempted; P2 is queued first
    assert [s.pid for s in timeline] == ["P1", "P2", "P1", "P1"]


def test_rr_idle_between_arrivals():
    timeline = schedule_rr(_procs(("P1", 0, 2), ("P2", 5, 3)), quantum=2)
    assert _segments(timeline) == [("P1", 0, 2), (None, 2, 5), ("P2", 5, 7), ("P2", 7, 8)]


@pytest.mark.parametrize("quantum", [0, -1])
def test_rr_rejects_non_positive_quantum(quantum):
    with pytest.raises(InvalidQuantum):
        run(_procs(("P1", 0, 3)), Policy.ROUND_ROBIN, quantum=quantum)


def test_quantum_ignored_by_non_preemptive_policies():
    assert _segments(run(_procs(("P1", 0, 3)), "fcfs", quantum=0)) == [("P1", 0, 3)]


def test_unknown_policy_fails_fast():
    with pytest.raises(UnsupportedPolicy):
        run(_procs(("P1", 0, 3)), "srtf")
    with pytest.raises(ValueError):
        simulate(_procs(("P1", 0, 3)), 42)


@pytest.mark.parametrize("token", ["FCFS", "fcfs", "SJF", "Priority", "RoundRobin", "rr", "round-robin"])
def test_policy_tokens(token):
    assert isinstance(Policy.parse(token), Policy)


def test_empty_input_gives_empty_timeline():
    for policy in Policy:
        assert run([], policy) == []


def test_duplicate_pids_are_rejected():
    procs = _procs(("P1", 0, 3), ("P1", 1, 2))
    with pytest.raises(DuplicateProcessId) as excinfo:
        run(procs, "fcfs")
    assert excinfo.value.pids == ["P1"]


def test_input_not_mutated():
    procs = example_processes()
    snapshot = list(procs)
    for policy in Policy:
        run(procs, policy, quantum=3)
    assert procs == snapshot


@pytest.mark.parametrize("policy", list(Policy))
@pytest.mark.parametrize("quantum", [1, 2, 3])
def test_timeline_is_contiguous_and_conserves_work(policy, quantum):
    procs = example_processes() + [
        Process("P6", arrival_time=40, burst_time=2, priority=0, insertion_order=5),
    ]
    timeline = run(procs, policy, quantum=quantum)

    assert timeline[0].start_time == 0
    for prev, nxt in zip(timeline, timeline[1:]):
        assert prev.end_time == nxt.start_time
    assert all(s.end_time > s.start_time for s in timeline)

    for p in procs:
        assert sum(s.duration for s in timeline if s.pid == p.pid) == p.burst_time


def test_example_set_fcfs_metrics():
    result = simulate(example_processes(), "fcfs")
    assert isinstance(result.timeline[0], ScheduledSlice)
    assert [s.pid for s in result.timeline] == ["P1", "P2", "P3", "P4", "P5"]
    waits = {m.pid: m.waiting_time for m in result.processes}
    assert waits == {"P1": 0, "P2": 4, "P3": 6, "P4": 13, "P5": 18}
    assert result.quantum is None
    assert result.policy is Policy.FCFS
