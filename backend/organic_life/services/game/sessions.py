import logging
import threading
import uuid
from typing import Dict, Optional

from .state import MACROMOLECULE_SCORE_REWARD, MONOMER_SCORE_REWARD, GameStore
from .timers import MonotonicClock

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


class SessionRegistry:
    """Owns the lifecycle of game stores: create at session start, dispose at end.

    - Sessions are keyed by an opaque id handed to the client
    - ``sweep()`` disposes sessions idle for longer than ``idle_timeout_sec``
    - Each session also carries a small dict of side data (active timed
      challenge, sign-in streak) that the store itself does not model
    """

    def __init__(self, clock=None, idle_timeout_sec: int = 3600,
                 monomer_reward: int = MONOMER_SCORE_REWARD,
                 macromolecule_reward: int = MACROMOLECULE_SCORE_REWARD):
        self.clock = clock or MonotonicClock()
        self.idle_timeout_ms = idle_timeout_sec * 1000
        self.monomer_reward = monomer_reward
        self.macromolecule_reward = macromolecule_reward
        self._stores: Dict[str, GameStore] = {}
        self._extras: Dict[str, dict] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config, clock=None) -> 'SessionRegistry':
        return cls(
            clock=clock,
            idle_timeout_sec=int(config.get('SESSION_IDLE_TIMEOUT_SEC', 3600)),
            monomer_reward=int(config.get('MONOMER_SCORE_REWARD', MONOMER_SCORE_REWARD)),
            macromolecule_reward=int(config.get('MACROMOLECULE_SCORE_REWARD', MACROMOLECULE_SCORE_REWARD)),
        )

    def create(self, snapshot: Optional[dict] = None) -> GameStore:
        session_id = uuid.uuid4().hex
        store = GameStore(
            clock=self.clock,
            monomer_reward=self.monomer_reward,
            macromolecule_reward=self.macromolecule_reward,
            session_id=session_id,
        )
        if snapshot:
            store.restore(snapshot)
        with self._lock:
            self._stores[session_id] = store
            self._extras[session_id] = {}
            self._last_seen[session_id] = self.clock.now_ms()
        logger.info(f"[session-create] session={session_id} restored={bool(snapshot)}")
        return store

    def get(self, session_id: str) -> GameStore:
        with self._lock:
            store = self._stores.get(session_id)
            if store is None:
                raise SessionNotFound(session_id)
            self._last_seen[session_id] = self.clock.now_ms()
        store.tick()
        return store

    def extras(self, session_id: str) -> dict:
        with self._lock:
            if session_id not in self._extras:
                raise SessionNotFound(session_id)
            return self._extras[session_id]

    def dispose(self, session_id: str) -> bool:
        with self._lock:
            store = self._stores.pop(session_id, None)
            self._extras.pop(session_id, None)
            self._last_seen.pop(session_id, None)
        if store is None:
            return False
        store.timers.clear()
        logger.info(f"[session-dispose] session={session_id}")
        return True

    def sweep(self) -> list:
        now = self.clock.now_ms()
        with self._lock:
            idle = [sid for sid, seen in self._last_seen.items() if now - seen > self.idle_timeout_ms]
        for sid in idle:
            self.dispose(sid)
        return idle

    def __contains__(self, session_id):
        return session_id in self._stores

    def __len__(self):
        return len(self._stores)
