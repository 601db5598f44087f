"""
Scorecard data models.

Provides immutable data transfer objects for graded performance reports.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ScorecardMetric:
    """Single graded metric."""
    key: str
    name: str
    grade: str
    value: float
    description: str = ""


@dataclass(frozen=True)
class Scorecard:
    """Complete graded report for one player."""
    username: str
    metrics: List[ScorecardMetric]
    overall: ScorecardMetric
    total_matches: int
    unique_opponents: int
    adjusted: bool = False

    def metric(self, key: str) -> ScorecardMetric:
        for metric in self.metrics:
            if metric.key == key:
                return metric
        if key == self.overall.key:
            return self.overall
        raise KeyError(key)

    @property
    def grades(self) -> Dict[str, str]:
        grades = {metric.key: metric.grade for metric in self.metrics}
        grades[self.overall.key] = self.overall.grade
        return grades


@dataclass(frozen=True)
class InsufficientData:
    """Eligibility not met; says how much more history is needed."""
    username: str
    matches_played: int
    opponents_faced: int
    matches_needed: int
    opponents_needed: int

    @property
    def message(self) -> str:
        parts = []
        if self.matches_needed:
            parts.append(f"{self.matches_needed} more match{'es' if self.matches_needed != 1 else ''}")
        if self.opponents_needed:
            parts.append(
                f"{self.opponents_needed} more unique opponent{'s' if self.opponents_needed != 1 else ''}"
            )
        return "More matches needed for grading: " + " and ".join(parts)
