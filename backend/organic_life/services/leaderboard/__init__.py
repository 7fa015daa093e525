"""Global leaderboard: ranking service and its storage backends."""
from .service import LeaderboardService, SubmitResult
from .store import InMemoryLeaderboardStore, LeaderboardEntry, SqlLeaderboardStore, demo_entries


def build_leaderboard(config) -> LeaderboardService:
    """Create the service described by the app config.

    ``LEADERBOARD_BACKEND`` picks ``memory`` (default) or ``sql``; the SQL
    store is seeded by the `flask db-reset` command.
    """
    capacity = int(config.get('LEADERBOARD_CAPACITY', 10))
    seed = config.get('LEADERBOARD_SEED', True)
    if config.get('LEADERBOARD_BACKEND', 'memory') == 'sql':
        return LeaderboardService(SqlLeaderboardStore(), capacity=capacity)
    entries = demo_entries()[:capacity] if seed else []
    return LeaderboardService(InMemoryLeaderboardStore(entries), capacity=capacity)


__all__ = [
    'LeaderboardEntry',
    'LeaderboardService',
    'InMemoryLeaderboardStore',
    'SqlLeaderboardStore',
    'SubmitResult',
    'build_leaderboard',
    'demo_entries',
]
