"""
Exceptions raised by the scheduling core and its loaders.

Every error derives from :class:`SchedulerError`, itself a ``ValueError``, so
callers that only care about "bad input" can catch a single type.
"""

from __future__ import annotations


class SchedulerError(ValueError):
    pass


class EmptyBatchError(SchedulerError):
    def __init__(self) -> None:
        super().__init__("Process batch is empty; nothing to schedule")


class InvalidBurstError(SchedulerError):
    def __init__(self, pid: str, burst_time: int) -> None:
        super().__init__(f"Process {pid!r} has non-positive burst time {burst_time}")
        self.pid = pid
        self.burst_time = burst_time


class InvalidArrivalError(SchedulerError):
    def __init__(self, pid: str, arrival_time: int) -> None:
        super().__init__(f"Process {pid!r} has negative arrival time {arrival_time}")
        self.pid = pid
        self.arrival_time = arrival_time


class DuplicateProcessIDError(SchedulerError):
    def __init__(self, pid: str) -> None:
        super().__init__(f"Process id {pid!r} appears more than once in the batch")
        self.pid = pid


class InvalidQuantumError(SchedulerError):
    def __init__(self, quantum) -> None:
        super().__init__(f"Round Robin quantum must be a positive integer, got {quantum!r}")
        self.quantum = quantum


class UnknownAlgorithmError(SchedulerError):
    pass


class WorkloadFormatError(SchedulerError):
    pass
