"""Challenge derivations: timed, daily, seasonal and sign-in.

Time and randomness are always passed in. Timed challenges use epoch
milliseconds so they survive being stored and reloaded as JSON.
"""
import math
import random
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, List, Optional

from organic_life.content.challenges import (
    DAILY_CHALLENGES,
    LIMITED_ACHIEVEMENTS,
    SEASONAL_EVENTS,
    SIGN_IN_REWARDS,
    TIMED_CHALLENGE_TYPES,
    get_sign_in_reward,
    get_timed_challenge_type,
)

from .timers import SystemClock

DAILY_CHALLENGES_PER_DAY = 3
SIGN_IN_CYCLE_DAYS = len(SIGN_IN_REWARDS)


@dataclass(frozen=True)
class TimedChallenge:
    id: str
    type: str
    name: str
    description: str
    icon: str
    difficulty: str
    duration_seconds: int
    start_time: float
    end_time: float
    target_score: int
    modifier: dict = field(default_factory=dict, hash=False)
    reward_score: int = 0
    reward_bonus: int = 0
    limited_achievement: Optional[str] = None
    active: bool = True
    completed: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'difficulty': self.difficulty,
            'duration_seconds': self.duration_seconds,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'target_score': self.target_score,
            'modifier': dict(self.modifier),
            'rewards': {
                'score': self.reward_score,
                'bonus': self.reward_bonus,
                'limited_achievement': self.limited_achievement,
            },
            'active': self.active,
            'completed': self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TimedChallenge':
        rewards = data.get('rewards') or {}
        return cls(
            id=data['id'],
            type=data['type'],
            name=data.get('name', ''),
            description=data.get('description', ''),
            icon=data.get('icon', ''),
            difficulty=data.get('difficulty', 'medium'),
            duration_seconds=int(data['duration_seconds']),
            start_time=float(data['start_time']),
            end_time=float(data['end_time']),
            target_score=int(data['target_score']),
            modifier=dict(data.get('modifier') or {}),
            reward_score=int(rewards.get('score', 0)),
            reward_bonus=int(rewards.get('bonus', 0)),
            limited_achievement=rewards.get('limited_achievement'),
            active=bool(data.get('active', True)),
            completed=bool(data.get('completed', False)),
        )


@dataclass(frozen=True)
class ChallengeOutcome:
    success: bool
    message: str
    challenge: TimedChallenge
    reward: int = 0
    limited_achievement: Optional[str] = None


@dataclass(frozen=True)
class SignInStatus:
    streak: int
    last_date: date
    is_new_day: bool

    @property
    def reward(self):
        return get_sign_in_reward(self.streak)


# ---- timed challenges ----

def generate_random_timed_challenge(clock=None, rng=None, type_key=None) -> TimedChallenge:
    """Pick one archetype uniformly and stamp it to start now."""
    clock = clock or SystemClock()
    rng = rng or random.Random()
    archetype = get_timed_challenge_type(type_key) if type_key else rng.choice(TIMED_CHALLENGE_TYPES)
    if archetype is None:
        raise ValueError(f"Unknown timed challenge type: {type_key}")
    now = clock.now_ms()
    return TimedChallenge(
        id=f"challenge_{int(now)}",
        type=archetype.type,
        name=archetype.name,
        description=archetype.description,
        icon=archetype.icon,
        difficulty=archetype.difficulty,
        duration_seconds=archetype.duration_seconds,
        start_time=now,
        end_time=now + archetype.duration_seconds * 1000,
        target_score=archetype.target_score,
        modifier=dict(archetype.modifier),
        reward_score=archetype.reward_score,
        reward_bonus=archetype.reward_bonus,
        limited_achievement=archetype.limited_achievement,
    )


def remaining_seconds(challenge: TimedChallenge, now_ms: float) -> int:
    return math.ceil(max(0.0, challenge.end_time - now_ms) / 1000)


def is_expired(challenge: TimedChallenge, now_ms: float) -> bool:
    return now_ms > challenge.end_time


def progress_percent(challenge: TimedChallenge, now_ms: float) -> float:
    total = challenge.duration_seconds * 1000
    if total <= 0:
        return 100.0
    elapsed = now_ms - challenge.start_time
    return max(0.0, min(100.0, elapsed / total * 100.0))


def complete_timed_challenge(challenge: TimedChallenge, score: int, now_ms: float) -> ChallengeOutcome:
    """Claim a timed challenge if the target was reached before it expired."""
    if challenge.completed:
        return ChallengeOutcome(False, 'Challenge already completed', challenge)
    if is_expired(challenge, now_ms):
        return ChallengeOutcome(False, 'Challenge expired', replace(challenge, active=False))
    if score < challenge.target_score:
        return ChallengeOutcome(
            False, f"Score {score} has not reached the target {challenge.target_score}", challenge)
    done = replace(challenge, active=False, completed=True)
    return ChallengeOutcome(
        True,
        f"Challenge complete! +{challenge.reward_score} points and +{challenge.reward_bonus} bonus",
        done,
        reward=challenge.reward_score + challenge.reward_bonus,
        limited_achievement=challenge.limited_achievement,
    )


def timed_challenge_view(challenge: TimedChallenge, now_ms: float) -> dict:
    payload = challenge.to_dict()
    payload['remaining_seconds'] = remaining_seconds(challenge, now_ms)
    payload['expired'] = is_expired(challenge, now_ms)
    payload['progress'] = progress_percent(challenge, now_ms)
    return payload


def limited_achievements_status(unlocked_ids: Iterable[str]) -> dict:
    unlocked_ids = set(unlocked_ids)
    items = [
        {
            'id': a.id,
            'name': a.name,
            'description': a.description,
            'icon': a.icon,
            'rarity': a.rarity,
            'challenge': a.challenge,
            'unlocked': a.id in unlocked_ids,
        }
        for a in LIMITED_ACHIEVEMENTS
    ]
    unlocked_count = sum(1 for i in items if i['unlocked'])
    return {
        'achievements': items,
        'unlocked_count': unlocked_count,
        'total': len(items),
        'percent': round(unlocked_count / len(items) * 100) if items else 0,
    }


# ---- daily / seasonal ----

def todays_challenges(today: date, count: int = DAILY_CHALLENGES_PER_DAY) -> list:
    """Rotate through the daily table by day of year."""
    start = today.timetuple().tm_yday % len(DAILY_CHALLENGES)
    return [DAILY_CHALLENGES[(start + i) % len(DAILY_CHALLENGES)] for i in range(count)]


def daily_challenge_met(challenge, score: int) -> bool:
    return score >= challenge.target_score


def active_seasonal_events(today: date) -> list:
    return [e for e in SEASONAL_EVENTS if e.start_date <= today <= e.end_date]


def current_season(today: date) -> int:
    """1 winter (Dec-Feb), 2 spring, 3 summer, 4 autumn."""
    month = today.month
    if month in (12, 1, 2):
        return 1
    if 3 <= month <= 5:
        return 2
    if 6 <= month <= 8:
        return 3
    return 4


def milestone_progress(score: int, milestone: int) -> float:
    if milestone <= 0:
        return 100.0
    return max(0.0, min(100.0, score / milestone * 100.0))


def seasonal_event_view(event, score: int) -> dict:
    payload = event.to_dict()
    payload['milestones'] = [
        {'milestone': m.milestone, 'reward': m.reward,
         'progress': milestone_progress(score, m.milestone),
         'reached': score >= m.milestone}
        for m in event.rewards
    ]
    return payload


# ---- sign-in ----

def advance_sign_in(last_date: Optional[date], streak: int, today: date) -> SignInStatus:
    """Next sign-in streak position in the seven-day cycle.

    Same day keeps the streak; the next day advances it (wrapping after day
    seven); any longer gap, or no previous sign-in, starts over at day one.
    An out-of-range streak is clamped into the cycle first.
    """
    if last_date is None:
        return SignInStatus(streak=1, last_date=today, is_new_day=True)
    streak = min(SIGN_IN_CYCLE_DAYS, max(1, streak))
    days = (today - last_date).days
    if days <= 0:
        return SignInStatus(streak=streak, last_date=last_date, is_new_day=False)
    if days == 1:
        return SignInStatus(streak=(streak % SIGN_IN_CYCLE_DAYS) + 1, last_date=today, is_new_day=True)
    return SignInStatus(streak=1, last_date=today, is_new_day=True)


def sign_in_calendar(streak: int, claimed_days: Iterable[int] = ()) -> List[dict]:
    claimed_days = set(claimed_days)
    return [
        dict(r.to_dict(), claimed=r.day in claimed_days, current=r.day == streak)
        for r in SIGN_IN_REWARDS
    ]
