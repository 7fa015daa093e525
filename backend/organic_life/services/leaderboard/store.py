"""Storage backends for the ranked leaderboard list.

A store only loads and saves the whole ranked list; ranking lives in
``LeaderboardService``.
"""
from dataclasses import asdict, dataclass
from typing import List


@dataclass
class LeaderboardEntry:
    rank: int
    player_name: str
    score: int
    level: int
    date: str
    cell_type: str

    def to_dict(self):
        return asdict(self)


DEMO_ENTRIES = (
    ('Quantum Scientist', 5000, 15, '2025-12-31', 'Animal Cell'),
    ('Molecular Engineer', 4500, 14, '2025-12-30', 'Plant Cell'),
    ('Life Explorer', 4200, 13, '2025-12-29', 'Fungal Cell'),
    ('Element Collector', 3800, 12, '2025-12-28', 'Prokaryotic Cell'),
    ('Synthesis Master', 3500, 11, '2025-12-27', 'Viral Particle'),
)


def demo_entries() -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(rank=i, player_name=name, score=score, level=level, date=day, cell_type=cell)
        for i, (name, score, level, day, cell) in enumerate(DEMO_ENTRIES, start=1)
    ]


class InMemoryLeaderboardStore:
    """Process-local, volatile list."""

    def __init__(self, entries=None):
        self._entries = [LeaderboardEntry(**e.to_dict()) for e in (entries or [])]

    def load(self) -> List[LeaderboardEntry]:
        return [LeaderboardEntry(**e.to_dict()) for e in self._entries]

    def save(self, entries: List[LeaderboardEntry]) -> None:
        self._entries = [LeaderboardEntry(**e.to_dict()) for e in entries]


class SqlLeaderboardStore:
    """Keeps the ranked list in the ``leaderboard_entry`` table.

    Must be used inside an application context.
    """

    def load(self) -> List[LeaderboardEntry]:
        from organic_life.models import LeaderboardRow
        rows = LeaderboardRow.query.order_by(LeaderboardRow.rank.asc()).all()
        return [row.to_entry() for row in rows]

    def save(self, entries: List[LeaderboardEntry]) -> None:
        from organic_life import db
        from organic_life.models import LeaderboardRow
        try:
            LeaderboardRow.query.delete()
            for entry in entries:
                db.session.add(LeaderboardRow.from_entry(entry))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def seed(self, entries: List[LeaderboardEntry]) -> None:
        if not self.load():
            self.save(entries)
