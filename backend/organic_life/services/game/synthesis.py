import logging
from dataclasses import dataclass, field
from typing import Dict

from .state import AnimationEvent, GameStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    success: bool
    message: str
    missing: Dict[str, int] = field(default_factory=dict, hash=False)

    def to_dict(self):
        return {'success': self.success, 'message': self.message, 'missing': dict(self.missing)}


def synthesize(store: GameStore, recipe, position=(0, 0)) -> SynthesisResult:
    """Assemble a macromolecule from a recipe, all or nothing.

    Every requirement is checked before any element is removed; a shortfall
    leaves the store untouched. On success the recipe's energy cost and health
    reward are applied after the level-up.
    """
    with store.lock:
        missing = store.missing_elements(recipe.elements)
        if missing:
            logger.info(f"[synthesize] session={store.session_id} recipe={recipe.id} ok=False missing={missing}")
            return SynthesisResult(False, f"Not enough elements to synthesize {recipe.name}", missing)

        for symbol, required in recipe.elements.items():
            if required > 0:
                store.remove_element(symbol, required)
        store.create_macromolecule(recipe, position)
        store.update_energy(-recipe.energy_cost)
        store.update_health(recipe.health_reward)
        store.trigger_animation(AnimationEvent(
            id=store.next_animation_id('macro'),
            kind='floating-text',
            position=tuple(position),
            payload={'color': recipe.color, 'text': f"+{store.macromolecule_reward}"},
            duration_ms=1000,
        ))

    logger.info(f"[synthesize] session={store.session_id} recipe={recipe.id} ok=True score={store.state.score}")
    return SynthesisResult(True, f"Synthesized {recipe.name}")


def assemble_monomer(store: GameStore, definition, position=(0, 0)) -> SynthesisResult:
    """Spend a monomer's elements and record it, all or nothing."""
    with store.lock:
        missing = store.missing_elements(definition.elements)
        if missing:
            return SynthesisResult(False, f"Not enough elements to assemble {definition.name}", missing)
        for symbol, required in definition.elements.items():
            if required > 0:
                store.remove_element(symbol, required)
        store.create_monomer(definition, position)
    logger.info(f"[monomer] session={store.session_id} monomer={definition.id} score={store.state.score}")
    return SynthesisResult(True, f"Assembled {definition.name}")
