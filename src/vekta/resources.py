"""Host resource inspection used to size model batches."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

LOGGER = logging.getLogger(__name__)

GIB = 1024 * 1024 * 1024

# (exclusive upper bound in GiB, batch size); anything larger gets the default.
_BATCH_TIERS: tuple[tuple[int, int], ...] = ((4, 1), (8, 4), (16, 8))
_LARGEST_BATCH = 16


@dataclass(slots=True)
class SystemResources:
    total_memory: int
    cpu_count: int
    batch_size: int

    @property
    def total_memory_gib(self) -> int:
        return self.total_memory // GIB


def batch_size_for_memory(total_memory: int) -> int:
    """Return the batch size for a host with *total_memory* bytes of RAM."""

    for limit_gib, batch_size in _BATCH_TIERS:
        if total_memory < limit_gib * GIB:
            return batch_size
    return _LARGEST_BATCH


def _read_meminfo_total(path: str = "/proc/meminfo") -> Optional[int]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            for line in handle:
                if line.startswith("MemTotal"):
                    return int(line.split()[1]) * 1024
    except (OSError, ValueError, IndexError):
        return None
    return None


def _read_sysconf_total() -> Optional[int]:
    try:
        pages = os.sysconf("SC_PHYS_PAGES")
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (AttributeError, OSError, ValueError):  # pragma: no cover - platform dependent
        return None
    if pages <= 0 or page_size <= 0:
        return None
    return pages * page_size


def read_total_memory() -> int:
    """Return total physical memory in bytes, or 0 when it cannot be read."""

    total = _read_meminfo_total()
    if total is None:
        total = _read_sysconf_total()
    return total or 0


def detect_system_resources(override: Optional[int] = None) -> SystemResources:
    """Inspect the host and log the batch size the pipelines will use.

    The core count is reported for information only. An explicit *override*
    replaces the memory-derived batch size.
    """

    total_memory = read_total_memory()
    cpu_count = os.cpu_count() or 1
    batch_size = override if override is not None else batch_size_for_memory(total_memory)
    resources = SystemResources(total_memory=total_memory, cpu_count=cpu_count, batch_size=batch_size)

    LOGGER.info(
        "Detected system: %s cores, %s GB RAM",
        resources.cpu_count,
        resources.total_memory_gib,
    )
    LOGGER.info("Using batch size: %s", resources.batch_size)
    return resources
