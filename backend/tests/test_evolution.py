import pytest

from organic_life.content.cells import ANIMAL_CELL, PROKARYOTIC_CELL, VIRAL_CELL, get_cell
from organic_life.services.game.evolution import (
    available_cells,
    cell_evolution_progress,
    is_cell_available,
    next_cell,
)


def test_only_prokaryotic_at_start():
    assert [c.id for c in available_cells(1, 0)] == ['prokaryotic']
    assert next_cell(1, 0) == ANIMAL_CELL


def test_unlock_needs_both_level_and_score():
    assert not is_cell_available(ANIMAL_CELL, 2, 99)
    assert not is_cell_available(ANIMAL_CELL, 1, 1000)
    assert is_cell_available(ANIMAL_CELL, 2, 100)


def test_progress_interpolates_between_unlock_scores():
    progress = cell_evolution_progress(1, 50)
    assert progress.current == PROKARYOTIC_CELL
    assert progress.next == ANIMAL_CELL
    assert progress.percent == pytest.approx(50.0)


def test_progress_when_blocked_on_level():
    # score already past the next threshold, level is not
    progress = cell_evolution_progress(1, 150)
    assert progress.next == ANIMAL_CELL
    assert progress.percent == 100.0


def test_progress_complete_when_everything_unlocked():
    progress = cell_evolution_progress(5, 500)
    assert progress.current == VIRAL_CELL
    assert progress.next is None
    assert progress.percent == 100.0
    assert progress.to_dict()['next'] is None


def test_get_cell_unknown_is_none():
    assert get_cell('plant').unlock_level == 3
    assert get_cell('nope') is None
