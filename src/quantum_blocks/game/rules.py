from __future__ import annotations

from dataclasses import dataclass


POINTS_PER_LEVEL = 1000


def level_for_score(score: int) -> int:
    return score // POINTS_PER_LEVEL + 1


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    initial_fall_delay_ms: int = 1000
    level_speed_multiplier: float = 0.9
    soft_drop_delay_ms: int = 50

    def __post_init__(self) -> None:
        if self.initial_fall_delay_ms <= 0 or self.soft_drop_delay_ms <= 0:
            raise ValueError("timer delays must be positive")
        if not 0.0 < self.level_speed_multiplier <= 1.0:
            raise ValueError("level_speed_multiplier must be in (0, 1]")

    def score_for_lines(self, lines: int) -> int:
        # A single tetromino can complete at most four rows
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        return 0

    def fall_delay_ms(self, score: int) -> float:
        """Fall interval, shortened by the multiplier once per 1000-point milestone."""
        milestones = score // POINTS_PER_LEVEL
        return self.initial_fall_delay_ms * (self.level_speed_multiplier ** milestones)
