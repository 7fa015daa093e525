import itertools
import random

import pytest

from organic_life.content.achievements import ALL_ACHIEVEMENTS, GameStats
from organic_life.services.game.achievements import (
    achievement_progress,
    achievements_by_rarity,
    achievements_view,
    next_achievements,
    total_achievement_points,
    unlocked_achievements,
)

ALL_RECIPES = {'glucose': 1, 'protein': 1, 'dna': 1, 'rna': 1, 'lipid': 1, 'starch': 1}


def _by_id(achievement_id):
    return next(a for a in ALL_ACHIEVEMENTS if a.id == achievement_id)


def test_nothing_unlocked_at_start():
    stats = GameStats()
    assert unlocked_achievements(stats) == []
    assert total_achievement_points(stats) == 0
    assert [a.id for a in next_achievements(stats)] == ['first_monomer', 'first_macromolecule', 'score_100']


def test_unlocked_in_tier_order():
    stats = GameStats(score=600, level=5, total_monomers=1, total_macromolecules=4)
    ids = [a.id for a in unlocked_achievements(stats)]
    assert ids == ['first_monomer', 'first_macromolecule', 'score_100', 'score_500', 'level_5']
    assert total_achievement_points(stats) == 10 + 15 + 20 + 50 + 40


def test_all_molecules_needs_every_recipe():
    monomers_only = {'glucose_unit': 1, 'glycine': 1, 'nucleotide': 1, 'fatty_acid': 1, 'dna': 1, 'rna': 1}
    assert not _by_id('all_molecules').condition(GameStats(molecules_created=monomers_only))
    assert _by_id('all_molecules').condition(GameStats(molecules_created=ALL_RECIPES))


def test_progress_for_threshold_achievements():
    stats = GameStats(score=250, total_monomers=25)
    assert achievement_progress(_by_id('score_500'), stats) == pytest.approx(50.0)
    assert achievement_progress(_by_id('monomer_master'), stats) == pytest.approx(25.0)
    assert achievement_progress(_by_id('score_100'), stats) == 100.0
    assert achievement_progress(_by_id('first_macromolecule'), stats) == 0.0


def test_next_achievements_limit():
    assert len(next_achievements(GameStats(), limit=5)) == 5
    assert next_achievements(GameStats(), limit=0) == []


def test_rarity_groups_cover_table():
    groups = achievements_by_rarity()
    assert sum(len(v) for v in groups.values()) == len(ALL_ACHIEVEMENTS)
    assert [a.id for a in groups['legendary']] == ['score_5000', 'monomer_master', 'macromolecule_master']


def test_view_payload():
    view = achievements_view(GameStats(score=120), limit=2)
    assert [a['id'] for a in view['unlocked']] == ['score_100']
    assert view['total_points'] == 20
    assert len(view['next']) == 2
    assert len(view['all']) == 12


STAT_STEPS = {
    'score': (0, 100, 500, 1000, 5000),
    'level': (1, 5, 10),
    'total_monomers': (0, 1, 100),
    'total_macromolecules': (0, 1, 50),
    'cells_unlocked': (1, 5),
    'molecules_created': ({}, {'glucose': 1}, ALL_RECIPES),
}


def _grid():
    names = list(STAT_STEPS)
    for indexes in itertools.product(*(range(len(STAT_STEPS[n])) for n in names)):
        yield dict(zip(names, indexes))


def _stats(indexes):
    return GameStats(**{name: STAT_STEPS[name][i] for name, i in indexes.items()})


def test_unlocks_only_grow_with_stats():
    # each field raised one step; any dominating pair is a chain of these
    for low in _grid():
        unlocked = {a.id for a in unlocked_achievements(_stats(low))}
        for name in STAT_STEPS:
            if low[name] + 1 == len(STAT_STEPS[name]):
                continue
            high = dict(low, **{name: low[name] + 1})
            assert unlocked <= {a.id for a in unlocked_achievements(_stats(high))}


def test_unlocks_grow_for_random_dominating_pairs():
    rng = random.Random(11)
    grid = list(_grid())
    for _ in range(300):
        low = rng.choice(grid)
        high = {name: rng.randint(i, len(STAT_STEPS[name]) - 1) for name, i in low.items()}
        assert ({a.id for a in unlocked_achievements(_stats(low))}
                <= {a.id for a in unlocked_achievements(_stats(high))})
