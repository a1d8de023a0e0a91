from __future__ import annotations

import os
from dataclasses import dataclass

PROJECTION_MONTHS = 36
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class EngineConfig:
    cache_size: int = 128
    compare_max_workers: int = 4
    distribution_tolerance: float = 0.01
    log_level: str = "INFO"


def get_engine_config() -> EngineConfig:
    return EngineConfig(
        cache_size=int(os.getenv("BIZMODEL_CACHE_SIZE", "128")),
        compare_max_workers=max(1, int(os.getenv("BIZMODEL_COMPARE_WORKERS", "4"))),
        distribution_tolerance=float(os.getenv("BIZMODEL_DISTRIBUTION_TOLERANCE", "0.01")),
        log_level=os.getenv("BIZMODEL_LOG_LEVEL", "INFO").upper(),
    )
