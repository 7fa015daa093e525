import pytest

from organic_life.content.biomolecules import get_monomer, get_recipe
from organic_life.services.game.sessions import SessionNotFound, SessionRegistry
from organic_life.services.game.timers import ManualClock, TimerQueue


def test_timer_queue_fires_in_deadline_order(clock):
    fired = []
    timers = TimerQueue(clock)
    timers.schedule('b', 200, lambda: fired.append('b'))
    timers.schedule('a', 100, lambda: fired.append('a'))
    assert timers.tick() == []
    clock.advance(250)
    assert timers.tick() == ['a', 'b']
    assert fired == ['a', 'b']
    assert len(timers) == 0


def test_timer_reschedule_replaces_deadline(clock):
    fired = []
    timers = TimerQueue(clock)
    timers.schedule('k', 100, lambda: fired.append(1))
    timers.schedule('k', 500, lambda: fired.append(2))
    assert timers.deadline('k') == 500
    clock.advance(100)
    timers.tick()
    assert fired == []
    clock.advance(400)
    timers.tick()
    assert fired == [2]


def test_timer_cancel_and_failing_callback(clock):
    timers = TimerQueue(clock)
    timers.schedule('gone', 10, lambda: pytest.fail('cancelled timer fired'))
    assert timers.cancel('gone') is True
    assert timers.cancel('gone') is False

    def boom():
        raise RuntimeError('boom')

    timers.schedule('boom', 0, boom)
    assert timers.tick() == ['boom']


def test_manual_clock_cannot_go_backwards():
    clock = ManualClock(10)
    with pytest.raises(ValueError):
        clock.advance(-1)


def test_registry_create_get_dispose(clock):
    registry = SessionRegistry(clock=clock)
    store = registry.create()
    assert store.session_id in registry
    assert registry.get(store.session_id) is store
    assert registry.extras(store.session_id) == {}
    assert registry.dispose(store.session_id) is True
    assert registry.dispose(store.session_id) is False
    with pytest.raises(SessionNotFound):
        registry.get(store.session_id)
    with pytest.raises(SessionNotFound):
        registry.extras(store.session_id)


def test_registry_sessions_are_isolated(clock):
    registry = SessionRegistry(clock=clock)
    first, second = registry.create(), registry.create()
    first.create_macromolecule(get_recipe('glucose'))
    assert first.state.score == 50
    assert second.state.score == 0
    assert len(registry) == 2


def test_registry_sweeps_idle_sessions(clock):
    registry = SessionRegistry(clock=clock, idle_timeout_sec=10)
    idle, active = registry.create(), registry.create()
    clock.advance(6000)
    registry.get(active.session_id)
    clock.advance(6000)
    assert registry.sweep() == [idle.session_id]
    assert active.session_id in registry


def test_registry_from_config_and_snapshot(clock):
    registry = SessionRegistry.from_config(
        {'MONOMER_SCORE_REWARD': 3, 'MACROMOLECULE_SCORE_REWARD': 7, 'SESSION_IDLE_TIMEOUT_SEC': 5},
        clock=clock,
    )
    store = registry.create(snapshot={'score': 40, 'level': 3})
    assert (store.state.score, store.state.level) == (40, 3)
    store.create_macromolecule(get_recipe('dna'))
    assert store.state.score == 47
    assert registry.idle_timeout_ms == 5000


def test_get_ticks_store_timers(clock):
    registry = SessionRegistry(clock=clock)
    store = registry.create()
    store.create_monomer(get_monomer('glycine'))
    assert len(store.animations) == 1
    clock.advance(1000)
    registry.get(store.session_id)
    assert store.animations == []
