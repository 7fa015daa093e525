"""Biomolecule recipes and monomer building blocks.

Recipes are what the synthesis bench consumes: every non-zero element amount
must be available before anything is deducted. Monomers are the smaller units
(one sugar, amino acid, nucleotide or fatty acid) that score on their own.
"""
from dataclasses import dataclass, field

from .elements import element_map


@dataclass(frozen=True)
class BiomoleculeRecipe:
    id: str
    name: str
    type: str  # protein, dna, lipid, carbohydrate
    description: str
    formula: str
    elements: dict = field(hash=False)
    color: str
    difficulty: str  # easy, medium, hard
    score_reward: int
    health_reward: int
    energy_cost: int
    icon: str = ''

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'description': self.description,
            'formula': self.formula,
            'elements': dict(self.elements),
            'color': self.color,
            'difficulty': self.difficulty,
            'score_reward': self.score_reward,
            'health_reward': self.health_reward,
            'energy_cost': self.energy_cost,
            'icon': self.icon,
        }


@dataclass(frozen=True)
class MonomerDefinition:
    id: str
    name: str
    formula: str
    type: str  # glucose, amino-acid, nucleotide, fatty-acid
    elements: dict = field(hash=False)
    color: str = '#84cc16'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'formula': self.formula,
            'type': self.type,
            'elements': dict(self.elements),
            'color': self.color,
        }


GLUCOSE = BiomoleculeRecipe(
    id='glucose',
    name='Glucose',
    type='carbohydrate',
    description='Simple sugar; the main fuel of cellular respiration.',
    formula='C6H12O6',
    elements=element_map(C=6, H=12, O=6),
    color='#06b6d4',
    difficulty='easy',
    score_reward=10,
    health_reward=5,
    energy_cost=5,
    icon='🧬',
)

PROTEIN = BiomoleculeRecipe(
    id='protein',
    name='Protein',
    type='protein',
    description='Amino acids joined by peptide bonds.',
    formula='(C5H9NO2)n',
    elements=element_map(C=5, H=9, O=2, N=1),
    color='#a855f7',
    difficulty='easy',
    score_reward=50,
    health_reward=15,
    energy_cost=10,
    icon='🧬',
)

DNA = BiomoleculeRecipe(
    id='dna',
    name='DNA',
    type='dna',
    description='Double-helix carrier of genetic information.',
    formula='(C10H12N4O6P)n',
    elements=element_map(C=10, H=12, O=6, N=4, P=1),
    color='#06b6d4',
    difficulty='hard',
    score_reward=100,
    health_reward=20,
    energy_cost=20,
    icon='🧬',
)

RNA = BiomoleculeRecipe(
    id='rna',
    name='RNA',
    type='dna',
    description='Single-stranded nucleic acid used in transcription and translation.',
    formula='(C10H12N4O7P)n',
    elements=element_map(C=10, H=12, O=7, N=4, P=1),
    color='#ef4444',
    difficulty='medium',
    score_reward=60,
    health_reward=12,
    energy_cost=12,
    icon='🧬',
)

LIPID = BiomoleculeRecipe(
    id='lipid',
    name='Lipid',
    type='lipid',
    description='Glycerol and fatty acids; energy storage and membrane structure.',
    formula='C55H104O6',
    elements=element_map(C=55, H=104, O=6),
    color='#f59e0b',
    difficulty='medium',
    score_reward=75,
    health_reward=10,
    energy_cost=15,
    icon='🫧',
)

STARCH = BiomoleculeRecipe(
    id='starch',
    name='Starch',
    type='carbohydrate',
    description='Polysaccharide of glucose units; the plant energy store.',
    formula='(C6H10O5)n',
    elements=element_map(C=6, H=10, O=5),
    color='#84cc16',
    difficulty='easy',
    score_reward=40,
    health_reward=12,
    energy_cost=8,
    icon='🌾',
)

ALL_BIOMOLECULES = (GLUCOSE, PROTEIN, DNA, RNA, LIPID, STARCH)

BIOMOLECULES_BY_DIFFICULTY = {
    'easy': (GLUCOSE, PROTEIN, STARCH),
    'medium': (RNA, LIPID),
    'hard': (DNA,),
}

BIOMOLECULES_BY_TYPE = {
    'protein': (PROTEIN,),
    'dna': (DNA, RNA),
    'lipid': (LIPID,),
    'carbohydrate': (GLUCOSE, STARCH),
}


ALL_MONOMERS = (
    MonomerDefinition(
        id='glucose_unit',
        name='Glucose unit',
        formula='C6H12O6',
        type='glucose',
        elements=element_map(C=6, H=12, O=6),
        color='#06b6d4',
    ),
    MonomerDefinition(
        id='glycine',
        name='Glycine',
        formula='C2H5NO2',
        type='amino-acid',
        elements=element_map(C=2, H=5, O=2, N=1),
        color='#a855f7',
    ),
    MonomerDefinition(
        id='nucleotide',
        name='Nucleotide',
        formula='C5H11O7P',
        type='nucleotide',
        elements=element_map(C=5, H=11, O=7, P=1),
        color='#ef4444',
    ),
    MonomerDefinition(
        id='fatty_acid',
        name='Fatty acid',
        formula='C4H8O2',
        type='fatty-acid',
        elements=element_map(C=4, H=8, O=2),
        color='#f59e0b',
    ),
)

_RECIPES = {r.id: r for r in ALL_BIOMOLECULES}
_MONOMERS = {m.id: m for m in ALL_MONOMERS}


def get_recipe(recipe_id):
    return _RECIPES.get(recipe_id)


def get_monomer(monomer_id):
    return _MONOMERS.get(monomer_id)
