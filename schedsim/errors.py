from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every failure raised by the simulator."""


class UnsupportedPolicy(SchedulerError, ValueError):
    def __init__(self, token) -> None:
        super().__init__(f"Unknown or unimplemented scheduling policy '{token}'")
        self.token = token


class InvalidQuantum(SchedulerError, ValueError):
    pass


class DuplicateProcessId(SchedulerError, ValueError):
    def __init__(self, pids) -> None:
        self.pids = list(pids)
        super().__init__(f"Duplicate process id(s): {', '.join(self.pids)}")


class WorkloadError(SchedulerError, ValueError):
    pass
