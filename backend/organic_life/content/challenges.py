"""Daily challenges, seasonal events, sign-in rewards and timed challenges."""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple


@dataclass(frozen=True)
class DailyChallenge:
    id: str
    name: str
    description: str
    icon: str
    target_score: int
    reward_score: int
    reward_bonus: int
    difficulty: str
    target_molecule: Optional[str] = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'target_molecule': self.target_molecule,
            'target_score': self.target_score,
            'reward': {'score': self.reward_score, 'bonus': self.reward_bonus},
            'difficulty': self.difficulty,
        }


@dataclass(frozen=True)
class Milestone:
    milestone: int
    reward: int


@dataclass(frozen=True)
class SeasonalEvent:
    id: str
    name: str
    description: str
    icon: str
    start_date: date
    end_date: date
    type: str
    modifier: dict = field(hash=False)
    rewards: Tuple[Milestone, ...] = ()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'type': self.type,
            'modifier': dict(self.modifier),
            'rewards': [{'milestone': m.milestone, 'reward': m.reward} for m in self.rewards],
        }


@dataclass(frozen=True)
class SignInReward:
    day: int
    reward: int
    icon: str
    description: str

    def to_dict(self):
        return {
            'day': self.day,
            'reward': self.reward,
            'icon': self.icon,
            'description': self.description,
        }


@dataclass(frozen=True)
class TimedChallengeType:
    type: str
    name: str
    description: str
    icon: str
    difficulty: str  # extreme, hard, medium
    duration_seconds: int
    target_score: int
    modifier: dict = field(hash=False)
    reward_score: int = 0
    reward_bonus: int = 0
    limited_achievement: Optional[str] = None


@dataclass(frozen=True)
class LimitedAchievement:
    id: str
    name: str
    description: str
    icon: str
    rarity: str  # legendary, epic, rare, uncommon
    challenge: str  # a timed challenge type, 'all' or 'any'


DAILY_CHALLENGES = (
    DailyChallenge(
        id='glucose_rush',
        name='Glucose Rush',
        description='Synthesize 5 glucose molecules within 10 minutes',
        icon='🍬',
        target_molecule='glucose',
        target_score=50,
        reward_score=100,
        reward_bonus=50,
        difficulty='easy',
    ),
    DailyChallenge(
        id='protein_master',
        name='Protein Master',
        description='Synthesize 3 proteins',
        icon='💪',
        target_molecule='protein',
        target_score=150,
        reward_score=200,
        reward_bonus=100,
        difficulty='medium',
    ),
    DailyChallenge(
        id='dna_explorer',
        name='DNA Explorer',
        description='Synthesize 1 DNA molecule',
        icon='🧬',
        target_molecule='dna',
        target_score=100,
        reward_score=300,
        reward_bonus=150,
        difficulty='hard',
    ),
    DailyChallenge(
        id='element_collector',
        name='Element Collector',
        description='Collect 100 elements',
        icon='⚛️',
        target_score=100,
        reward_score=150,
        reward_bonus=75,
        difficulty='easy',
    ),
    DailyChallenge(
        id='cell_evolution',
        name='Cell Evolver',
        description='Reach level 3',
        icon='🦠',
        target_score=200,
        reward_score=250,
        reward_bonus=125,
        difficulty='medium',
    ),
)

SEASONAL_EVENTS = (
    SeasonalEvent(
        id='winter_scarcity',
        name='Winter Element Scarcity',
        description='Complete syntheses with element supply cut by half',
        icon='❄️',
        start_date=date(2025, 12, 21),
        end_date=date(2025, 12, 31),
        type='element_scarcity',
        modifier={'element_multiplier': 0.5, 'score_multiplier': 1.5},
        rewards=(Milestone(100, 500), Milestone(300, 1000), Milestone(500, 2000)),
    ),
    SeasonalEvent(
        id='spring_marathon',
        name='Spring Synthesis Marathon',
        description='Synthesize as many molecules as possible in 24 hours',
        icon='🌸',
        start_date=date(2026, 3, 20),
        end_date=date(2026, 3, 27),
        type='synthesis_marathon',
        modifier={'score_multiplier': 2.0},
        rewards=(Milestone(50, 300), Milestone(150, 800), Milestone(300, 1500)),
    ),
    SeasonalEvent(
        id='summer_cell_race',
        name='Summer Cell Evolution Race',
        description='Be first to unlock a new cell type',
        icon='☀️',
        start_date=date(2026, 6, 21),
        end_date=date(2026, 6, 28),
        type='cell_evolution_race',
        modifier={'score_multiplier': 1.2},
        rewards=(Milestone(200, 600), Milestone(400, 1200), Milestone(600, 2000)),
    ),
    SeasonalEvent(
        id='autumn_madness',
        name='Autumn Molecule Madness',
        description='Synthesize while energy consumption is doubled',
        icon='🍂',
        start_date=date(2026, 9, 22),
        end_date=date(2026, 9, 29),
        type='molecule_madness',
        modifier={'energy_consumption': 2.0, 'score_multiplier': 1.8},
        rewards=(Milestone(100, 400), Milestone(250, 900), Milestone(400, 1800)),
    ),
)

# Seven-day cycle
SIGN_IN_REWARDS = (
    SignInReward(1, 100, '🎁', 'Welcome back! 100 points'),
    SignInReward(2, 150, '🎀', '2-day streak: 150 points'),
    SignInReward(3, 200, '🎊', '3-day streak: 200 points'),
    SignInReward(4, 250, '🏆', '4-day streak: 250 points'),
    SignInReward(5, 300, '⭐', '5-day streak: 300 points'),
    SignInReward(6, 400, '💫', '6-day streak: 400 points'),
    SignInReward(7, 500, '👑', 'Full week: 500 points and a special badge'),
)

TIMED_CHALLENGE_TYPES = (
    TimedChallengeType(
        type='blackhole',
        name='Black Hole',
        description='A black hole is eating your energy! Score 500 within 3 minutes',
        icon='🌌',
        difficulty='extreme',
        duration_seconds=180,
        target_score=500,
        modifier={'score_multiplier': 2.5, 'energy_consumption': 1.5},
        reward_score=1000,
        reward_bonus=500,
        limited_achievement='blackhole_survivor',
    ),
    TimedChallengeType(
        type='element_storm',
        name='Element Storm',
        description='Element supply drops by 70%, but score rewards double',
        icon='⛈️',
        difficulty='extreme',
        duration_seconds=120,
        target_score=300,
        modifier={'score_multiplier': 2.0, 'element_reduction': 0.3},
        reward_score=800,
        reward_bonus=400,
        limited_achievement='storm_chaser',
    ),
    TimedChallengeType(
        type='synthesis_frenzy',
        name='Synthesis Frenzy',
        description='Synthesize 10 molecules within 5 minutes',
        icon='🔥',
        difficulty='hard',
        duration_seconds=300,
        target_score=400,
        modifier={'score_multiplier': 1.8, 'element_consumption': 0.8},
        reward_score=600,
        reward_bonus=300,
        limited_achievement='synthesis_master',
    ),
    TimedChallengeType(
        type='energy_crisis',
        name='Energy Crisis',
        description='Energy is running out! Restore it to 80% within 4 minutes',
        icon='⚡',
        difficulty='hard',
        duration_seconds=240,
        target_score=350,
        modifier={'score_multiplier': 1.5, 'energy_consumption': 2.0},
        reward_score=500,
        reward_bonus=250,
        limited_achievement='energy_savior',
    ),
    TimedChallengeType(
        type='mutation_surge',
        name='Mutation Surge',
        description='Your cell is mutating! Synthesize special molecules to stabilise it',
        icon='🧬',
        difficulty='medium',
        duration_seconds=150,
        target_score=250,
        modifier={'score_multiplier': 1.3, 'element_consumption': 1.2},
        reward_score=400,
        reward_bonus=200,
        limited_achievement='mutation_handler',
    ),
)

LIMITED_ACHIEVEMENTS = (
    LimitedAchievement('blackhole_survivor', 'Black Hole Survivor',
                       'Survive the black hole challenge', '🌌', 'legendary', 'blackhole'),
    LimitedAchievement('storm_chaser', 'Storm Chaser',
                       'Complete the element storm challenge', '⛈️', 'legendary', 'element_storm'),
    LimitedAchievement('synthesis_master', 'Synthesis Master',
                       'Excel during the synthesis frenzy', '🔥', 'epic', 'synthesis_frenzy'),
    LimitedAchievement('energy_savior', 'Energy Savior',
                       'Save your cell from the energy crisis', '⚡', 'epic', 'energy_crisis'),
    LimitedAchievement('mutation_handler', 'Mutation Handler',
                       'Stabilise a cell mutation', '🧬', 'rare', 'mutation_surge'),
    LimitedAchievement('challenge_collector', 'Challenge Collector',
                       'Complete every type of timed challenge', '🏆', 'epic', 'all'),
    LimitedAchievement('speed_demon', 'Speed Demon',
                       'Reach a 3x score multiplier in a timed challenge', '⚙️', 'rare', 'any'),
    LimitedAchievement('perfect_timing', 'Perfect Timing',
                       'Hit the target in the last 10 seconds of a timed challenge', '⏰', 'rare', 'any'),
)

_TIMED_TYPES = {t.type: t for t in TIMED_CHALLENGE_TYPES}


def get_timed_challenge_type(type_key):
    return _TIMED_TYPES.get(type_key)


def get_sign_in_reward(day):
    for reward in SIGN_IN_REWARDS:
        if reward.day == day:
            return reward
    return None
