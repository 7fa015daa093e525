"""Static, read-only content tables.

Everything here is defined at import time and never mutated. Ids are checked
for uniqueness when the package is first imported.
"""
from .achievements import ALL_ACHIEVEMENTS
from .biomolecules import ALL_BIOMOLECULES, ALL_MONOMERS
from .cells import ALL_CELL_TYPES
from .challenges import (
    DAILY_CHALLENGES,
    LIMITED_ACHIEVEMENTS,
    SEASONAL_EVENTS,
    TIMED_CHALLENGE_TYPES,
)


def _check_unique(name, ids):
    ids = list(ids)
    duplicates = {i for i in ids if ids.count(i) > 1}
    if duplicates:
        raise RuntimeError(f"Duplicate ids in {name}: {sorted(duplicates)}")


_check_unique('achievements', (a.id for a in ALL_ACHIEVEMENTS))
_check_unique('biomolecules', (r.id for r in ALL_BIOMOLECULES))
_check_unique('monomers', (m.id for m in ALL_MONOMERS))
_check_unique('cell types', (c.id for c in ALL_CELL_TYPES))
_check_unique('daily challenges', (c.id for c in DAILY_CHALLENGES))
_check_unique('seasonal events', (e.id for e in SEASONAL_EVENTS))
_check_unique('timed challenges', (t.type for t in TIMED_CHALLENGE_TYPES))
_check_unique('limited achievements', (a.id for a in LIMITED_ACHIEVEMENTS))
