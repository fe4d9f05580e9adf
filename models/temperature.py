from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TemperatureRecord:
    """One month of the land-surface series."""

    year: int
    month: int  # 1-12, 1 = January
    variance: float  # °C relative to the base temperature
    temperature: float  # base_temperature + variance

    @property
    def month_index(self) -> int:
        """Zero-based month (January = 0) as exposed on rendered cells."""
        return self.month - 1


@dataclass(frozen=True)
class Dataset:
    """Parsed global temperature dataset; immutable once loaded."""

    base_temperature: float
    records: tuple[TemperatureRecord, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[TemperatureRecord]:
        return iter(self.records)

    @property
    def years(self) -> list[int]:
        """Distinct years in first-seen order."""
        return list(dict.fromkeys(r.year for r in self.records))

    @property
    def months(self) -> list[int]:
        """Distinct months in first-seen order."""
        return list(dict.fromkeys(r.month for r in self.records))

    @property
    def year_extent(self) -> tuple[int, int]:
        years = [r.year for r in self.records]
        return min(years), max(years)

    @property
    def temperature_extent(self) -> tuple[float, float]:
        temps = [r.temperature for r in self.records]
        return min(temps), max(temps)
