from typing import Dict, List

from organic_life.content.achievements import ALL_ACHIEVEMENTS, RARITIES, RECIPE_IDS, Achievement, GameStats, recipes_created

# achievement id -> (metric, threshold)
_PROGRESS_METRICS = {
    'score_100': (lambda s: s.score, 100),
    'score_500': (lambda s: s.score, 500),
    'score_1000': (lambda s: s.score, 1000),
    'score_5000': (lambda s: s.score, 5000),
    'level_5': (lambda s: s.level, 5),
    'level_10': (lambda s: s.level, 10),
    'monomer_master': (lambda s: s.total_monomers, 100),
    'macromolecule_master': (lambda s: s.total_macromolecules, 50),
    'unlock_all_cells': (lambda s: s.cells_unlocked, 5),
    'all_molecules': (recipes_created, len(RECIPE_IDS)),
}


def unlocked_achievements(stats: GameStats) -> List[Achievement]:
    """Achievements whose condition holds, in table (tier) order."""
    return [a for a in ALL_ACHIEVEMENTS if a.condition(stats)]


def total_achievement_points(stats: GameStats) -> int:
    return sum(a.points for a in unlocked_achievements(stats))


def next_achievements(stats: GameStats, limit: int = 3) -> List[Achievement]:
    unlocked_ids = {a.id for a in unlocked_achievements(stats)}
    return [a for a in ALL_ACHIEVEMENTS if a.id not in unlocked_ids][:max(0, limit)]


def achievement_progress(achievement: Achievement, stats: GameStats) -> float:
    """Progress towards an achievement as a percentage in [0, 100].

    Threshold achievements report metric / threshold; anything without a
    continuous metric is 0 or 100 depending on its condition.
    """
    metric = _PROGRESS_METRICS.get(achievement.id)
    if metric is None:
        return 100.0 if achievement.condition(stats) else 0.0
    value, threshold = metric
    return max(0.0, min(100.0, value(stats) / threshold * 100.0))


def achievements_by_rarity() -> Dict[str, List[Achievement]]:
    return {rarity: [a for a in ALL_ACHIEVEMENTS if a.rarity == rarity] for rarity in RARITIES}


def achievements_view(stats: GameStats, limit: int = 3) -> dict:
    unlocked = unlocked_achievements(stats)
    unlocked_ids = {a.id for a in unlocked}
    return {
        'unlocked': [a.to_dict() for a in unlocked],
        'total_points': sum(a.points for a in unlocked),
        'next': [
            dict(a.to_dict(), progress=achievement_progress(a, stats))
            for a in next_achievements(stats, limit)
        ],
        'all': [
            dict(a.to_dict(), unlocked=a.id in unlocked_ids, progress=achievement_progress(a, stats))
            for a in ALL_ACHIEVEMENTS
        ],
    }
