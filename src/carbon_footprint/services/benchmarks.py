"""Benchmark lookups and footprint rankings."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from carbon_footprint.domain.footprint import Benchmarks

GLOBAL_TARGET = 2000.0
DEFAULT_AVERAGE = 4800.0

_COUNTRY_AVERAGES = MappingProxyType(
    {
        "usa": 16000.0,
        "uk": 8500.0,
        "germany": 9600.0,
        "france": 6800.0,
        "china": 7500.0,
        "india": 1900.0,
        "japan": 9500.0,
    }
)

# (share of average, percentile), checked in order.
_PERCENTILE_STEPS = ((0.5, 90), (0.75, 70), (1.0, 50), (1.25, 30))
_LOWEST_PERCENTILE = 10

# (exclusive upper bound, label, message), checked in order.
_CATEGORY_LADDER = (
    (2000.0, "Climate Hero", "Outstanding! You are well below the global target."),
    (4000.0, "Low Impact", "Great job! You have a low carbon footprint."),
    (
        8000.0,
        "Average",
        "You are around average. There is room for improvement.",
    ),
    (
        12000.0,
        "High Impact",
        "Your footprint is above average. Consider our recommendations.",
    ),
)
_TOP_CATEGORY = (
    "Very High Impact",
    "Your footprint is significantly high. Urgent action recommended.",
)


@dataclass(frozen=True)
class BenchmarkService:
    """Compares footprints against regional averages."""

    averages: Mapping[str, float] = field(default_factory=lambda: _COUNTRY_AVERAGES)
    default_average: float = DEFAULT_AVERAGE
    global_target: float = GLOBAL_TARGET

    def local_average(self, country: str) -> float:
        """Average annual footprint for a country, case-insensitive."""
        return self.averages.get(country.strip().lower(), self.default_average)

    def national_average(self, country: str) -> float:
        return self.local_average(country)

    def percentile(self, emissions: float, country: str) -> int:
        """Coarse five-tier ranking against the local average."""
        average = self.local_average(country)
        for share, percentile in _PERCENTILE_STEPS:
            if emissions <= average * share:
                return percentile
        return _LOWEST_PERCENTILE

    def benchmarks(self, emissions: float, country: str) -> Benchmarks:
        """Build the benchmark block for a footprint total."""
        return Benchmarks(
            local_average=self.local_average(country),
            national_average=self.national_average(country),
            global_target=self.global_target,
            percentile=self.percentile(emissions, country),
        )


def carbon_category(emissions: float) -> str:
    """Display label for an annual total."""
    for upper, label, _ in _CATEGORY_LADDER:
        if emissions < upper:
            return label
    return _TOP_CATEGORY[0]


def carbon_message(emissions: float) -> str:
    """Short ranking message for an annual total."""
    for upper, _, message in _CATEGORY_LADDER:
        if emissions < upper:
            return message
    return _TOP_CATEGORY[1]
