"""
Grid Cells

A cell stores the belief that its area of the world is occupied:
- 0.0 = definitely free
- 1.0 = definitely occupied
- UNKNOWN (-1) = never observed

The belief changes only through fusion (`cell += observation`). Each
variant implements its own fusion rule:
- GridCell: last observation wins
- AveragingGridCell: weighted running mean
- BlendingGridCell: tinySLAM-style blend toward the observation
- LogOddsGridCell: clamped log-odds accumulation
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from core.errors import InvalidConfigurationError
from core.robot_pose import Point2D

UNKNOWN = -1.0


@dataclass(frozen=True)
class Occupancy:
    """Evidence carried by a single observation of an area."""
    prob_occ: float                   # Probability the area is occupied
    estimation_quality: float = 1.0   # Confidence in prob_occ (0-1)

    def __post_init__(self):
        for name in ('prob_occ', 'estimation_quality'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigurationError(
                    f"Occupancy.{name} must be in [0, 1], got {value}")


@dataclass(frozen=True)
class AreaOccupancyObservation:
    """One measurement event applied to one cell."""
    is_occupied: bool
    occupancy: Occupancy
    obs_point: Point2D = field(default_factory=lambda: Point2D(0.0, 0.0))
    beam_count: int = 1


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, value))


class GridCell:
    """
    Plain cell: the most recent observation replaces the belief.

    Usage:
        cell = GridCell()
        cell += AreaOccupancyObservation(True, Occupancy(1.0, 1.0))
        assert cell.value == 1.0
    """

    def __init__(self, initial: Optional[Occupancy] = None):
        """
        Args:
            initial: Starting evidence (default: unknown)
        """
        self._value = UNKNOWN if initial is None else initial.prob_occ

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_unknown(self) -> bool:
        return self._value == UNKNOWN

    def __iadd__(self, observation: AreaOccupancyObservation) -> 'GridCell':
        self._fuse(observation)
        return self

    def _fuse(self, observation: AreaOccupancyObservation):
        self._value = _clamp_unit(observation.occupancy.prob_occ)

    def clone(self) -> 'GridCell':
        """Independent copy; fusing into it never touches this cell."""
        duplicate = self.__class__.__new__(self.__class__)
        duplicate.__dict__.update(self.__dict__)
        return duplicate

    def blank(self) -> 'GridCell':
        """Fresh unknown cell of the same variant."""
        duplicate = self.clone()
        duplicate._reset()
        return duplicate

    def _reset(self):
        self._value = UNKNOWN

    def __repr__(self):
        return f"{self.__class__.__name__}(value={self._value:.3f})"


class AveragingGridCell(GridCell):
    """Running mean of prob_occ weighted by quality and beam count."""

    def __init__(self, initial: Optional[Occupancy] = None):
        super().__init__(initial)
        self._weight = 0.0 if initial is None else initial.estimation_quality

    def _fuse(self, observation: AreaOccupancyObservation):
        occ = observation.occupancy
        weight = occ.estimation_quality * observation.beam_count
        if weight <= 0:
            return
        if self.is_unknown:
            self._value, self._weight = occ.prob_occ, weight
            return
        self._weight += weight
        self._value += (occ.prob_occ - self._value) * weight / self._weight
        self._value = _clamp_unit(self._value)

    def _reset(self):
        super()._reset()
        self._weight = 0.0


class BlendingGridCell(GridCell):
    """
    tinySLAM / CoreSLAM update rule.

    value = (1 - q) * value + q * prob_occ, where q is the estimation
    quality. An unknown cell starts from the 0.5 prior.
    """

    PRIOR = 0.5

    def _fuse(self, observation: AreaOccupancyObservation):
        occ = observation.occupancy
        current = self.PRIOR if self.is_unknown else self._value
        q = occ.estimation_quality
        self._value = _clamp_unit((1.0 - q) * current + q * occ.prob_occ)


class LogOddsGridCell(GridCell):
    """
    Log-odds accumulation.

    Each beam adds L_OCC for a hit and L_FREE for a pass-through, clamped
    to [L_MIN, L_MAX]. Because of the clamp the value never reaches
    exactly 0.0 or 1.0.
    """

    L_OCC = 0.85    # Log-odds for occupied
    L_FREE = -0.4   # Log-odds for free
    L_MIN = -5.0
    L_MAX = 5.0

    def __init__(self, initial: Optional[Occupancy] = None):
        super().__init__(None)
        self._log_odds: Optional[float] = None
        if initial is not None:
            p = min(max(initial.prob_occ, 1e-6), 1.0 - 1e-6)
            self._set_log_odds(math.log(p / (1.0 - p)))

    def _set_log_odds(self, log_odds: float):
        self._log_odds = min(self.L_MAX, max(self.L_MIN, log_odds))
        self._value = 1.0 - 1.0 / (1.0 + math.exp(self._log_odds))

    @property
    def log_odds(self) -> Optional[float]:
        return self._log_odds

    def _fuse(self, observation: AreaOccupancyObservation):
        step = self.L_OCC if observation.is_occupied else self.L_FREE
        current = 0.0 if self._log_odds is None else self._log_odds
        self._set_log_odds(current + step * observation.beam_count)

    def _reset(self):
        super()._reset()
        self._log_odds = None
