from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class DashboardSettings:
    top_subjects: int = 5
    top_locations: int = 10
    page_size: int = 10
    page_sizes: Tuple[int, ...] = (10, 25, 50, 100)
    data_glob: str = "SIGAMI*.xlsx"


DEFAULT_SETTINGS = DashboardSettings()
