"""Cell evolution derivations over the cell table."""
from dataclasses import dataclass
from typing import List, Optional

from organic_life.content.cells import ALL_CELL_TYPES, PROKARYOTIC_CELL, CellType


@dataclass(frozen=True)
class EvolutionProgress:
    current: CellType
    next: Optional[CellType]
    percent: float

    def to_dict(self):
        return {
            'current': self.current.to_dict(),
            'next': self.next.to_dict() if self.next else None,
            'percent': self.percent,
        }


def is_cell_available(cell: CellType, level: int, score: int) -> bool:
    return cell.unlock_level <= level and cell.unlock_score <= score


def available_cells(level: int, score: int) -> List[CellType]:
    return [cell for cell in ALL_CELL_TYPES if is_cell_available(cell, level, score)]


def next_cell(level: int, score: int) -> Optional[CellType]:
    for cell in ALL_CELL_TYPES:
        if not is_cell_available(cell, level, score):
            return cell
    return None


def cell_evolution_progress(level: int, score: int) -> EvolutionProgress:
    """Current cell, next locked cell and score progress between them.

    The percentage interpolates score linearly between the current cell's and
    the next cell's unlock scores, clamped to [0, 100]. With nothing left to
    unlock it is 100.
    """
    available = available_cells(level, score)
    current = available[-1] if available else PROKARYOTIC_CELL
    upcoming = next_cell(level, score)

    percent = 100.0
    if upcoming is not None:
        span = upcoming.unlock_score - current.unlock_score
        if span <= 0:
            # blocked on level only
            percent = 100.0 if score >= upcoming.unlock_score else 0.0
        else:
            percent = max(0.0, min(100.0, (score - current.unlock_score) / span * 100.0))
    return EvolutionProgress(current=current, next=upcoming, percent=percent)
