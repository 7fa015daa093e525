import logging
import math
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .store import InMemoryLeaderboardStore, LeaderboardEntry

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10
UNKNOWN_PLAYER = 'Unknown'


@dataclass(frozen=True)
class SubmitResult:
    success: bool
    message: str
    rank: Optional[int] = None

    def to_dict(self):
        payload = {'success': self.success, 'message': self.message}
        if self.rank is not None:
            payload['rank'] = self.rank
        return payload


class LeaderboardService:
    """Ranked top-N list of scores.

    - Entries are sorted by descending score with ranks 1..N
    - A submission is accepted while the board has room or when it beats the
      current lowest score
    - Check, insert, sort, re-rank and truncate run under one lock
    """

    def __init__(self, store=None, capacity: int = DEFAULT_CAPACITY,
                 today: Callable[[], date] = date.today):
        self.store = store if store is not None else InMemoryLeaderboardStore()
        self.capacity = capacity
        self.today = today
        self._lock = threading.Lock()

    def get_global_leaderboard(self, limit: int = 10, offset: int = 0) -> dict:
        entries = self.store.load()
        page = entries[offset:offset + limit]
        return {
            'leaderboard': page,
            'total': len(entries),
            'has_more': offset + limit < len(entries),
        }

    def submit_score(self, player_name: str, score: int, level: int, cell_type: str) -> SubmitResult:
        with self._lock:
            entries = self.store.load()
            lowest = entries[-1].score if entries else 0
            if not (score > lowest or len(entries) < self.capacity):
                logger.info(f"[leaderboard-submit] player={player_name!r} score={score} rejected lowest={lowest}")
                return SubmitResult(False, f"Your score {score} did not make the leaderboard.")

            new_entry = LeaderboardEntry(
                rank=len(entries) + 1,
                player_name=player_name,
                score=score,
                level=level,
                date=self.today().isoformat(),
                cell_type=cell_type,
            )
            entries.append(new_entry)
            # stable: ties keep their submission order
            entries.sort(key=lambda e: e.score, reverse=True)
            for index, entry in enumerate(entries, start=1):
                entry.rank = index
            del entries[self.capacity:]
            self.store.save(entries)

        logger.info(f"[leaderboard-submit] player={player_name!r} score={score} rank={new_entry.rank}")
        return SubmitResult(
            True,
            f"Congratulations! You entered the global leaderboard at #{new_entry.rank}!",
            rank=new_entry.rank,
        )

    def get_player_rank(self, player_name: str) -> Optional[LeaderboardEntry]:
        for entry in self.store.load():
            if entry.player_name == player_name:
                return entry
        return None

    def get_stats(self) -> dict:
        entries = self.store.load()
        total = len(entries)
        avg = sum(e.score for e in entries) / total if total else 0
        return {
            'total_players': total,
            'avg_score': math.floor(avg + 0.5),
            'max_score': entries[0].score if entries else 0,
            'min_score': entries[-1].score if entries else 0,
            'top_player': entries[0].player_name if entries else UNKNOWN_PLAYER,
        }
