"""Achievement table.

Each achievement carries a predicate over a ``GameStats`` snapshot. The table
is listed in tier order (common, rare, epic, legendary); derivations preserve
that order.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from .biomolecules import ALL_BIOMOLECULES

RARITIES = ('common', 'rare', 'epic', 'legendary')

RECIPE_IDS = frozenset(r.id for r in ALL_BIOMOLECULES)


@dataclass(frozen=True)
class GameStats:
    score: int = 0
    level: int = 1
    total_monomers: int = 0
    total_macromolecules: int = 0
    cells_unlocked: int = 1
    max_energy: int = 100
    max_health: int = 100
    molecules_created: Dict[str, int] = field(default_factory=dict, hash=False)
    cells_evolved: Tuple[str, ...] = ()


def recipes_created(stats: GameStats) -> int:
    """Distinct macromolecule recipes made at least once (monomers excluded)."""
    return len(RECIPE_IDS.intersection(stats.molecules_created))


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    color: str
    condition: Callable[[GameStats], bool] = field(compare=False, repr=False)
    points: int
    rarity: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'color': self.color,
            'points': self.points,
            'rarity': self.rarity,
        }


# Common
FIRST_MONOMER = Achievement(
    id='first_monomer',
    name='First Step',
    description='Synthesize your first monomer',
    icon='🌱',
    color='#84cc16',
    condition=lambda s: s.total_monomers >= 1,
    points=10,
    rarity='common',
)

FIRST_MACROMOLECULE = Achievement(
    id='first_macromolecule',
    name='Life Builder',
    description='Assemble your first macromolecule',
    icon='🧬',
    color='#a855f7',
    condition=lambda s: s.total_macromolecules >= 1,
    points=15,
    rarity='common',
)

SCORE_100 = Achievement(
    id='score_100',
    name='Rising Star',
    description='Reach 100 points',
    icon='⭐',
    color='#f59e0b',
    condition=lambda s: s.score >= 100,
    points=20,
    rarity='common',
)

# Rare
SCORE_500 = Achievement(
    id='score_500',
    name='Molecular Master',
    description='Reach 500 points',
    icon='🔬',
    color='#06b6d4',
    condition=lambda s: s.score >= 500,
    points=50,
    rarity='rare',
)

LEVEL_5 = Achievement(
    id='level_5',
    name='Evolution Expert',
    description='Reach level 5',
    icon='🦾',
    color='#ec4899',
    condition=lambda s: s.level >= 5,
    points=40,
    rarity='rare',
)

ALL_MOLECULES = Achievement(
    id='all_molecules',
    name='Molecular Collection',
    description='Synthesize every kind of molecule',
    icon='📚',
    color='#8b5cf6',
    condition=lambda s: recipes_created(s) >= len(RECIPE_IDS),
    points=60,
    rarity='rare',
)

# Epic
SCORE_1000 = Achievement(
    id='score_1000',
    name='Genetic Engineer',
    description='Reach 1000 points',
    icon='🧪',
    color='#ef4444',
    condition=lambda s: s.score >= 1000,
    points=100,
    rarity='epic',
)

LEVEL_10 = Achievement(
    id='level_10',
    name='Supreme Creator',
    description='Reach level 10',
    icon='👑',
    color='#fbbf24',
    condition=lambda s: s.level >= 10,
    points=80,
    rarity='epic',
)

UNLOCK_ALL_CELLS = Achievement(
    id='unlock_all_cells',
    name='Cell Evolution Master',
    description='Unlock every cell type',
    icon='🌍',
    color='#10b981',
    condition=lambda s: s.cells_unlocked >= 5,
    points=150,
    rarity='epic',
)

# Legendary
SCORE_5000 = Achievement(
    id='score_5000',
    name='Life Architect',
    description='Reach 5000 points',
    icon='🏛️',
    color='#06b6d4',
    condition=lambda s: s.score >= 5000,
    points=250,
    rarity='legendary',
)

MONOMER_MASTER = Achievement(
    id='monomer_master',
    name='Monomer Maestro',
    description='Synthesize 100 monomers',
    icon='🎵',
    color='#a855f7',
    condition=lambda s: s.total_monomers >= 100,
    points=200,
    rarity='legendary',
)

MACROMOLECULE_MASTER = Achievement(
    id='macromolecule_master',
    name='Macromolecule Maestro',
    description='Assemble 50 macromolecules',
    icon='🎼',
    color='#ec4899',
    condition=lambda s: s.total_macromolecules >= 50,
    points=200,
    rarity='legendary',
)

ALL_ACHIEVEMENTS = (
    FIRST_MONOMER,
    FIRST_MACROMOLECULE,
    SCORE_100,
    SCORE_500,
    LEVEL_5,
    ALL_MOLECULES,
    SCORE_1000,
    LEVEL_10,
    UNLOCK_ALL_CELLS,
    SCORE_5000,
    MONOMER_MASTER,
    MACROMOLECULE_MASTER,
)
