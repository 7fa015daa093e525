"""Evolvable cell types, unlocked by level and score thresholds.

``ALL_CELL_TYPES`` is ordered by ascending unlock threshold; the evolution
derivations rely on that order.
"""
from dataclasses import dataclass, field

from .elements import element_map


@dataclass(frozen=True)
class CellType:
    id: str
    name: str
    description: str
    unlock_level: int
    unlock_score: int
    icon: str
    color: str
    base_elements: dict = field(hash=False)
    special_ability: str = ''
    characteristics: tuple = ()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'unlock_level': self.unlock_level,
            'unlock_score': self.unlock_score,
            'icon': self.icon,
            'color': self.color,
            'base_elements': dict(self.base_elements),
            'special_ability': self.special_ability,
            'characteristics': list(self.characteristics),
        }


PROKARYOTIC_CELL = CellType(
    id='prokaryotic',
    name='Prokaryotic Cell',
    description='The simplest cell form, without a nucleus; bacteria and archaea.',
    unlock_level=1,
    unlock_score=0,
    icon='🦠',
    color='#06b6d4',
    base_elements=element_map(C=5, H=8, O=4, N=2, P=1),
    special_ability='Rapid division: +10% score on every synthesis',
    characteristics=('No nucleus', 'No organelles', 'Rapid division', 'Highly adaptable'),
)

ANIMAL_CELL = CellType(
    id='animal',
    name='Animal Cell',
    description='Eukaryotic cell without a cell wall, with centrioles and a flexible shape.',
    unlock_level=2,
    unlock_score=100,
    icon='🧬',
    color='#a855f7',
    base_elements=element_map(C=7, H=11, O=5, N=3, P=1, S=1),
    special_ability='Nerve conduction: +20% score on every synthesis',
    characteristics=('No cell wall', 'Centrioles', 'Flexible shape', 'Active metabolism'),
)

PLANT_CELL = CellType(
    id='plant',
    name='Plant Cell',
    description='Eukaryotic cell with a cell wall and chloroplasts; photosynthesises.',
    unlock_level=3,
    unlock_score=200,
    icon='🌱',
    color='#84cc16',
    base_elements=element_map(C=8, H=12, O=6, N=3, P=2, S=1),
    special_ability='Photosynthesis: restores 15% energy on every synthesis',
    characteristics=('Cell wall', 'Chloroplasts', 'Photosynthesis', 'Rigid structure'),
)

FUNGAL_CELL = CellType(
    id='fungal',
    name='Fungal Cell',
    description='Eukaryotic cell with a chitin wall and no chloroplasts; heterotrophic.',
    unlock_level=4,
    unlock_score=350,
    icon='🍄',
    color='#f59e0b',
    base_elements=element_map(C=9, H=13, O=7, N=3, P=2, S=1),
    special_ability='Decomposition: restores 10% health on every synthesis',
    characteristics=('Cell wall', 'No chloroplasts', 'Heterotrophic', 'Strong decomposer'),
)

VIRAL_CELL = CellType(
    id='viral',
    name='Viral Particle',
    description='Minimal carrier of genetic material; replicates only inside a host.',
    unlock_level=5,
    unlock_score=500,
    icon='🦠',
    color='#ef4444',
    base_elements=element_map(C=4, H=6, O=3, N=2, P=1),
    special_ability='Parasitic replication: costs 5 score, grants 50% bonus reward',
    characteristics=('No membrane', 'Needs a host', 'Fast replication', 'Highly specific'),
)

ALL_CELL_TYPES = (
    PROKARYOTIC_CELL,
    ANIMAL_CELL,
    PLANT_CELL,
    FUNGAL_CELL,
    VIRAL_CELL,
)

CELLS_BY_LEVEL = {cell.unlock_level: cell for cell in ALL_CELL_TYPES}

_CELLS = {cell.id: cell for cell in ALL_CELL_TYPES}


def get_cell(cell_id):
    return _CELLS.get(cell_id)
