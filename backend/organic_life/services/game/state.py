"""Per-session game state store.

One ``GameStore`` holds a player's resources for a single play session plus
the queue of cosmetic animation events. Stores are created and disposed by
``SessionRegistry``; nothing here is global.
"""
import copy
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from organic_life.content.achievements import GameStats
from organic_life.content.biomolecules import get_monomer, get_recipe
from organic_life.content.cells import PROKARYOTIC_CELL
from organic_life.content.elements import ELEMENT_SYMBOLS, STARTING_ELEMENTS, is_element

from .evolution import available_cells
from .timers import TimerQueue

logger = logging.getLogger(__name__)

MONOMER_SCORE_REWARD = 10
MACROMOLECULE_SCORE_REWARD = 50
MIN_GAUGE = 0
MAX_GAUGE = 100

ANIMATION_KINDS = ('particle', 'pulse', 'floating-text')


def clamp(value, low=MIN_GAUGE, high=MAX_GAUGE):
    return max(low, min(high, value))


@dataclass
class PlayerState:
    element_counts: Dict[str, int] = field(default_factory=lambda: dict(STARTING_ELEMENTS))
    monomers: list = field(default_factory=list)
    macromolecules: list = field(default_factory=list)
    total_monomers_created: int = 0
    total_macromolecules_created: int = 0
    score: int = 0
    level: int = 1
    energy: int = MAX_GAUGE
    health: int = MAX_GAUGE
    current_cell_id: str = PROKARYOTIC_CELL.id
    unlocked_cell_ids: List[str] = field(default_factory=lambda: [PROKARYOTIC_CELL.id])
    molecules_created: Dict[str, int] = field(default_factory=dict)

    @property
    def monomer_count(self) -> int:
        return len(self.monomers)

    @property
    def macromolecule_count(self) -> int:
        return len(self.macromolecules)


@dataclass(frozen=True)
class AnimationEvent:
    id: str
    kind: str
    position: Tuple[float, float] = (0, 0)
    payload: dict = field(default_factory=dict, hash=False)
    duration_ms: int = 1000

    def to_dict(self):
        return {
            'id': self.id,
            'kind': self.kind,
            'x': self.position[0],
            'y': self.position[1],
            'payload': dict(self.payload),
            'duration_ms': self.duration_ms,
        }


class GameStore:
    """Mutable container for one player's session.

    Every mutator runs under the store lock, so a check-then-decrement such as
    ``remove_element`` is a single step for concurrent callers.
    """

    def __init__(self, clock=None, monomer_reward=MONOMER_SCORE_REWARD,
                 macromolecule_reward=MACROMOLECULE_SCORE_REWARD, session_id=None):
        self.session_id = session_id
        self.monomer_reward = monomer_reward
        self.macromolecule_reward = macromolecule_reward
        self.timers = TimerQueue(clock)
        self.state = PlayerState()
        self._animations: Dict[str, AnimationEvent] = {}
        self._animation_seq = 0
        self.lock = threading.RLock()

    @property
    def clock(self):
        return self.timers.clock

    # ---- elements ----

    def add_element(self, symbol: str, amount: int) -> None:
        _check_element(symbol)
        if amount < 0:
            raise ValueError('amount must be >= 0')
        with self.lock:
            self.state.element_counts[symbol] += int(amount)

    def remove_element(self, symbol: str, amount: int) -> bool:
        _check_element(symbol)
        if amount < 0:
            raise ValueError('amount must be >= 0')
        with self.lock:
            if self.state.element_counts[symbol] < amount:
                return False
            self.state.element_counts[symbol] -= int(amount)
            return True

    def has_elements(self, requirements: Dict[str, int]) -> bool:
        with self.lock:
            return not self.missing_elements(requirements)

    def missing_elements(self, requirements: Dict[str, int]) -> Dict[str, int]:
        """Shortfall per symbol for the given requirements (empty when affordable)."""
        with self.lock:
            missing = {}
            for symbol, required in requirements.items():
                have = self.state.element_counts.get(symbol, 0)
                if required > have:
                    missing[symbol] = required - have
            return missing

    # ---- synthesis rewards ----

    def create_monomer(self, definition, position=(0, 0)) -> None:
        with self.lock:
            s = self.state
            s.monomers.append(definition)
            s.score += self.monomer_reward
            s.total_monomers_created += 1
            s.molecules_created[definition.id] = s.molecules_created.get(definition.id, 0) + 1
            self.trigger_animation(AnimationEvent(
                id=self.next_animation_id('monomer'),
                kind='floating-text',
                position=tuple(position),
                payload={'color': '#84cc16', 'text': f"+{self.monomer_reward}"},
                duration_ms=1000,
            ))

    def create_macromolecule(self, definition, position=(0, 0)) -> None:
        with self.lock:
            s = self.state
            s.macromolecules.append(definition)
            s.score += self.macromolecule_reward
            # every macromolecule is a level-up
            s.level += 1
            s.total_macromolecules_created += 1
            s.molecules_created[definition.id] = s.molecules_created.get(definition.id, 0) + 1

    def award_points(self, points: int) -> int:
        """Credit challenge or sign-in rewards to the score."""
        if points < 0:
            raise ValueError('points must be >= 0')
        with self.lock:
            self.state.score += int(points)
            return self.state.score

    # ---- gauges ----

    def update_energy(self, delta: int) -> int:
        with self.lock:
            self.state.energy = clamp(self.state.energy + delta)
            return self.state.energy

    def update_health(self, delta: int) -> int:
        with self.lock:
            self.state.health = clamp(self.state.health + delta)
            return self.state.health

    # ---- cells ----

    def switch_cell(self, cell_id: str) -> None:
        """Set the current cell. Eligibility is the caller's responsibility.

        Unlock tracking is left to ``unlock_available_cells``.
        """
        with self.lock:
            self.state.current_cell_id = cell_id

    def unlock_available_cells(self) -> List[str]:
        """Record every cell the current level/score allows; returns new ids."""
        with self.lock:
            newly = []
            for cell in available_cells(self.state.level, self.state.score):
                if cell.id not in self.state.unlocked_cell_ids:
                    self.state.unlocked_cell_ids.append(cell.id)
                    newly.append(cell.id)
            return newly

    # ---- lifecycle ----

    def reset(self) -> None:
        with self.lock:
            self.state = PlayerState()
            self._animations.clear()
            self.timers.clear()

    # ---- animations ----

    def trigger_animation(self, event: AnimationEvent) -> None:
        if event.kind not in ANIMATION_KINDS:
            raise ValueError(f"Unknown animation kind: {event.kind}")
        with self.lock:
            if event.id in self._animations:
                raise ValueError(f"Duplicate animation id: {event.id}")
            self._animations[event.id] = event
            self.timers.schedule(('animation', event.id), event.duration_ms,
                                 lambda: self.clear_animation(event.id))

    def clear_animation(self, animation_id: str) -> None:
        with self.lock:
            self._animations.pop(animation_id, None)
            self.timers.cancel(('animation', animation_id))

    @property
    def animations(self) -> List[AnimationEvent]:
        with self.lock:
            return list(self._animations.values())

    def tick(self) -> None:
        self.timers.tick()

    def next_animation_id(self, prefix: str) -> str:
        self._animation_seq += 1
        return f"{prefix}-{int(self.clock.now_ms())}-{self._animation_seq}"

    # ---- views ----

    def stats(self) -> GameStats:
        with self.lock:
            s = self.state
            return GameStats(
                score=s.score,
                level=s.level,
                total_monomers=s.total_monomers_created,
                total_macromolecules=s.total_macromolecules_created,
                cells_unlocked=len(s.unlocked_cell_ids),
                max_energy=MAX_GAUGE,
                max_health=MAX_GAUGE,
                molecules_created=dict(s.molecules_created),
                cells_evolved=tuple(s.unlocked_cell_ids),
            )

    def snapshot(self) -> dict:
        """JSON-ready copy of the player state (animations are not included)."""
        with self.lock:
            s = self.state
            return {
                'elements': dict(s.element_counts),
                'monomers': [m.id for m in s.monomers],
                'macromolecules': [m.id for m in s.macromolecules],
                'total_monomers_created': s.total_monomers_created,
                'total_macromolecules_created': s.total_macromolecules_created,
                'score': s.score,
                'level': s.level,
                'energy': s.energy,
                'health': s.health,
                'current_cell_id': s.current_cell_id,
                'unlocked_cell_ids': list(s.unlocked_cell_ids),
                'molecules_created': copy.deepcopy(s.molecules_created),
            }

    def restore(self, data: dict) -> None:
        """Load a snapshot produced by ``snapshot()``; unknown ids are dropped."""
        fresh = PlayerState()
        elements = data.get('elements') or {}
        for symbol in ELEMENT_SYMBOLS:
            if symbol in elements:
                fresh.element_counts[symbol] = max(0, int(elements[symbol]))
        fresh.monomers = [m for m in (get_monomer(i) for i in data.get('monomers', [])) if m]
        fresh.macromolecules = [r for r in (get_recipe(i) for i in data.get('macromolecules', [])) if r]
        fresh.total_monomers_created = int(data.get('total_monomers_created', len(fresh.monomers)))
        fresh.total_macromolecules_created = int(
            data.get('total_macromolecules_created', len(fresh.macromolecules)))
        fresh.score = max(0, int(data.get('score', 0)))
        fresh.level = max(1, int(data.get('level', 1)))
        fresh.energy = clamp(int(data.get('energy', MAX_GAUGE)))
        fresh.health = clamp(int(data.get('health', MAX_GAUGE)))
        fresh.current_cell_id = data.get('current_cell_id') or PROKARYOTIC_CELL.id
        unlocked = list(data.get('unlocked_cell_ids') or [PROKARYOTIC_CELL.id])
        fresh.unlocked_cell_ids = list(dict.fromkeys(unlocked))
        fresh.molecules_created = {str(k): int(v) for k, v in (data.get('molecules_created') or {}).items()}
        with self.lock:
            self.state = fresh

    @classmethod
    def from_snapshot(cls, data: dict, **kwargs) -> 'GameStore':
        store = cls(**kwargs)
        store.restore(data)
        return store

    def to_dict(self) -> dict:
        payload = self.snapshot()
        payload['session_id'] = self.session_id
        payload['monomer_count'] = self.state.monomer_count
        payload['macromolecule_count'] = self.state.macromolecule_count
        payload['animations'] = [a.to_dict() for a in self.animations]
        return payload


def _check_element(symbol):
    if not is_element(symbol):
        raise ValueError(f"Unknown element symbol: {symbol!r}")
