"""
Score types for comparing and aggregating trial outcomes.

A score is a totally ordered value made of one or more levels, compared
lexicographically (the first level dominates). Hard levels come before soft
levels; a score is feasible when none of its hard levels is negative.
"""

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type, Union

Number = Union[int, float]

_NUMBER_PATTERN = r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?"


class Score(ABC):
    """
    Base class for all score types.

    Subclasses only describe their levels; arithmetic and ordering are
    implemented here on top of `to_level_numbers()`.
    """

    @abstractmethod
    def to_level_numbers(self) -> Tuple[Number, ...]:
        """Return every level, hard levels first."""

    @abstractmethod
    def from_level_numbers(self, levels: Tuple[Number, ...]) -> "Score":
        """Build a score of the same type and shape from raw levels."""

    @abstractmethod
    def is_feasible(self) -> bool:
        """Whether all hard constraints are satisfied."""

    @property
    def level_count(self) -> int:
        return len(self.to_level_numbers())

    def add(self, other: "Score") -> "Score":
        self._check_compatible(other)
        return self.from_level_numbers(tuple(
            a + b for a, b in zip(self.to_level_numbers(), other.to_level_numbers())
        ))

    def subtract(self, other: "Score") -> "Score":
        self._check_compatible(other)
        return self.from_level_numbers(tuple(
            a - b for a, b in zip(self.to_level_numbers(), other.to_level_numbers())
        ))

    def divide(self, divisor: Number) -> "Score":
        """
        Divide every level by a scalar.

        Integer levels are floored so that an integer score stays an integer
        score; float levels are divided exactly.
        """
        if divisor == 0:
            raise ValueError(f"Cannot divide score ({self}) by zero")
        return self.from_level_numbers(tuple(
            _divide_level(level, divisor) for level in self.to_level_numbers()
        ))

    def compare_to(self, other: "Score") -> int:
        """Return a negative, zero or positive int like a classic comparator."""
        self._check_compatible(other)
        mine = self.to_level_numbers()
        theirs = other.to_level_numbers()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def _check_compatible(self, other: "Score") -> None:
        if not isinstance(other, Score):
            raise ValueError(f"Cannot combine score ({self}) with non-score ({other!r})")
        if type(self) is not type(other) or self.level_count != other.level_count:
            raise ValueError(
                f"Score ({self}) of type {type(self).__name__} is not compatible "
                f"with score ({other}) of type {type(other).__name__}"
            )

    def __add__(self, other: "Score") -> "Score":
        return self.add(other)

    def __sub__(self, other: "Score") -> "Score":
        return self.subtract(other)

    def __truediv__(self, divisor: Number) -> "Score":
        return self.divide(divisor)

    def __lt__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, Score):
            return NotImplemented
        return self.compare_to(other) >= 0


def _divide_level(level: Number, divisor: Number) -> Number:
    if isinstance(level, int) and not isinstance(level, bool):
        return int(math.floor(level / divisor))
    return level / divisor


@dataclass(frozen=True)
class SimpleScore(Score):
    """Single-level score. Always feasible."""
    score: Number

    def to_level_numbers(self) -> Tuple[Number, ...]:
        return (self.score,)

    def from_level_numbers(self, levels: Tuple[Number, ...]) -> "SimpleScore":
        return SimpleScore(levels[0])

    def is_feasible(self) -> bool:
        return True

    @classmethod
    def parse(cls, text: str) -> "SimpleScore":
        match = re.fullmatch(f"({_NUMBER_PATTERN})", text.strip())
        if not match:
            raise ValueError(f"Cannot parse simple score from '{text}'")
        return cls(_parse_number(match.group(1)))

    def __str__(self) -> str:
        return str(self.score)


@dataclass(frozen=True)
class HardSoftScore(Score):
    """Two-level score: hard constraints, then soft constraints."""
    hard_score: Number
    soft_score: Number

    def to_level_numbers(self) -> Tuple[Number, ...]:
        return (self.hard_score, self.soft_score)

    def from_level_numbers(self, levels: Tuple[Number, ...]) -> "HardSoftScore":
        return HardSoftScore(levels[0], levels[1])

    def is_feasible(self) -> bool:
        return self.hard_score >= 0

    @classmethod
    def parse(cls, text: str) -> "HardSoftScore":
        match = re.fullmatch(
            f"({_NUMBER_PATTERN})hard/({_NUMBER_PATTERN})soft", text.strip()
        )
        if not match:
            raise ValueError(f"Cannot parse hard/soft score from '{text}'")
        return cls(_parse_number(match.group(1)), _parse_number(match.group(2)))

    def __str__(self) -> str:
        return f"{self.hard_score}hard/{self.soft_score}soft"


@dataclass(frozen=True)
class BendableScore(Score):
    """Score with a configurable number of hard and soft levels."""
    hard_scores: Tuple[Number, ...]
    soft_scores: Tuple[Number, ...]

    def __post_init__(self):
        # Stored as tuples, lists are accepted
        object.__setattr__(self, "hard_scores", tuple(self.hard_scores))
        object.__setattr__(self, "soft_scores", tuple(self.soft_scores))

    @property
    def hard_level_count(self) -> int:
        return len(self.hard_scores)

    def to_level_numbers(self) -> Tuple[Number, ...]:
        return self.hard_scores + self.soft_scores

    def from_level_numbers(self, levels: Tuple[Number, ...]) -> "BendableScore":
        return BendableScore(
            tuple(levels[:self.hard_level_count]),
            tuple(levels[self.hard_level_count:]),
        )

    def _check_compatible(self, other: Score) -> None:
        super()._check_compatible(other)
        if self.hard_level_count != other.hard_level_count:
            raise ValueError(
                f"Score ({self}) has {self.hard_level_count} hard levels, "
                f"score ({other}) has {other.hard_level_count}"
            )

    def is_feasible(self) -> bool:
        return all(level >= 0 for level in self.hard_scores)

    @classmethod
    def parse(cls, text: str) -> "BendableScore":
        match = re.fullmatch(r"\[([^\]]*)\]hard/\[([^\]]*)\]soft", text.strip())
        if not match:
            raise ValueError(f"Cannot parse bendable score from '{text}'")
        return cls(_parse_levels(match.group(1), text), _parse_levels(match.group(2), text))

    def __str__(self) -> str:
        hard = "/".join(str(level) for level in self.hard_scores)
        soft = "/".join(str(level) for level in self.soft_scores)
        return f"[{hard}]hard/[{soft}]soft"


SCORE_TYPES: Dict[str, Type[Score]] = {
    "simple": SimpleScore,
    "hard_soft": HardSoftScore,
    "bendable": BendableScore,
}


def get_score_parser(score_type: str) -> Callable[[str], Score]:
    """
    Get the parser for a configured score type.

    Args:
        score_type: One of the keys of SCORE_TYPES

    Returns:
        Callable turning a score string into a Score
    """
    if score_type not in SCORE_TYPES:
        raise ValueError(
            f"Unknown score type '{score_type}', expected one of {sorted(SCORE_TYPES)}"
        )
    return SCORE_TYPES[score_type].parse


def score_with_uninitialized_prefix(
    uninitialized_variable_count: Optional[int],
    score: Optional[Score],
) -> Optional[str]:
    """Render a score, prefixed with "<n>init/" when variables were left unassigned."""
    if score is None:
        return None
    if not uninitialized_variable_count:
        return str(score)
    return f"{-uninitialized_variable_count}init/{score}"


def _parse_number(text: str) -> Number:
    if any(marker in text for marker in ".eE"):
        return float(text)
    return int(text)


def _parse_levels(text: str, original: str) -> Tuple[Number, ...]:
    if not text:
        return ()
    levels = []
    for part in text.split("/"):
        if not re.fullmatch(_NUMBER_PATTERN, part.strip()):
            raise ValueError(f"Cannot parse score level '{part}' in '{original}'")
        levels.append(_parse_number(part.strip()))
    return tuple(levels)
