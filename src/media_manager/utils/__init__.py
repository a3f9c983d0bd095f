"""Utility helpers for media manager."""

from .memory_monitor import AllocationReport, MemorySnapshot, take_snapshot

__all__ = ["AllocationReport", "MemorySnapshot", "take_snapshot"]
