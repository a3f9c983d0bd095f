"""
Memory usage snapshot for the allocations report.
"""

import os
import time
from dataclasses import dataclass

import psutil


@dataclass
class MemorySnapshot:
    """A snapshot of process memory usage at a point in time"""
    timestamp: float
    rss_mb: float  # Resident Set Size in MB
    vms_mb: float  # Virtual Memory Size in MB
    percent: float  # Percentage of system memory used


def take_snapshot() -> MemorySnapshot:
    """Read the current process's memory usage from psutil."""
    process = psutil.Process(os.getpid())
    memory_info = process.memory_info()

    return MemorySnapshot(
        timestamp=time.time(),
        rss_mb=memory_info.rss / 1024 / 1024,
        vms_mb=memory_info.vms / 1024 / 1024,
        percent=process.memory_percent(),
    )


@dataclass
class AllocationReport:
    """How many records and collections are live, plus process memory."""
    records: int
    collections: int
    memory: MemorySnapshot

    def describe(self) -> str:
        return (
            "Memory allocations:\n"
            f"Records: {self.records}\n"
            f"Collections: {self.collections}\n"
            f"Process memory: {self.memory.rss_mb:.1f} MB"
        )
