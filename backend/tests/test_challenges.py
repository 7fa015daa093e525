import random
from datetime import date

import pytest

from organic_life.content.challenges import DAILY_CHALLENGES, TIMED_CHALLENGE_TYPES
from organic_life.services.game.challenges import (
    TimedChallenge,
    active_seasonal_events,
    advance_sign_in,
    complete_timed_challenge,
    current_season,
    daily_challenge_met,
    generate_random_timed_challenge,
    is_expired,
    limited_achievements_status,
    milestone_progress,
    progress_percent,
    remaining_seconds,
    seasonal_event_view,
    sign_in_calendar,
    todays_challenges,
)
from organic_life.services.game.timers import ManualClock


def _challenge(type_key='blackhole', start_ms=0.0):
    return generate_random_timed_challenge(clock=ManualClock(start_ms), type_key=type_key)


def test_same_seed_same_challenge():
    first = generate_random_timed_challenge(clock=ManualClock(1000), rng=random.Random(3))
    second = generate_random_timed_challenge(clock=ManualClock(1000), rng=random.Random(3))
    assert first == second
    assert first.type in {t.type for t in TIMED_CHALLENGE_TYPES}


def test_generated_challenge_window():
    ch = _challenge('blackhole', start_ms=5000)
    assert ch.id == 'challenge_5000'
    assert ch.start_time == 5000
    assert ch.end_time == 5000 + 180 * 1000
    assert ch.target_score == 500
    assert ch.active and not ch.completed


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        generate_random_timed_challenge(clock=ManualClock(), type_key='supernova')


def test_remaining_and_progress():
    ch = _challenge('element_storm')  # 120 seconds
    assert remaining_seconds(ch, 0) == 120
    assert remaining_seconds(ch, 500) == 120
    assert remaining_seconds(ch, 60000) == 60
    assert progress_percent(ch, 30000) == pytest.approx(25.0)
    assert remaining_seconds(ch, 200000) == 0
    assert not is_expired(ch, 120000)
    assert is_expired(ch, 120001)


def test_complete_awards_score_plus_bonus():
    ch = _challenge('mutation_surge')
    outcome = complete_timed_challenge(ch, score=250, now_ms=1000)
    assert outcome.success
    assert outcome.reward == 400 + 200
    assert outcome.limited_achievement == 'mutation_handler'
    assert outcome.challenge.completed and not outcome.challenge.active

    again = complete_timed_challenge(outcome.challenge, score=250, now_ms=2000)
    assert not again.success


def test_complete_fails_below_target_or_expired():
    ch = _challenge('mutation_surge')
    assert not complete_timed_challenge(ch, score=249, now_ms=1000).success
    late = complete_timed_challenge(ch, score=9999, now_ms=ch.end_time + 1)
    assert not late.success
    assert not late.challenge.active


def test_challenge_dict_round_trip():
    ch = _challenge('energy_crisis', start_ms=42)
    assert TimedChallenge.from_dict(ch.to_dict()) == ch


def test_limited_achievements_status():
    status = limited_achievements_status(['storm_chaser'])
    assert status['total'] == 8
    assert status['unlocked_count'] == 1
    assert status['percent'] == 12
    assert [a['id'] for a in status['achievements'] if a['unlocked']] == ['storm_chaser']


def test_daily_rotation_is_stable_per_day():
    day = date(2026, 1, 2)  # day of year 2
    picked = todays_challenges(day)
    assert [c.id for c in picked] == [DAILY_CHALLENGES[i].id for i in (2, 3, 4)]
    assert todays_challenges(day) == picked
    assert daily_challenge_met(picked[0], 100)
    assert not daily_challenge_met(picked[0], 99)


def test_seasonal_events_and_season():
    assert [e.id for e in active_seasonal_events(date(2025, 12, 25))] == ['winter_scarcity']
    assert active_seasonal_events(date(2026, 1, 15)) == []
    assert current_season(date(2026, 1, 15)) == 1
    assert current_season(date(2026, 4, 1)) == 2
    assert current_season(date(2026, 7, 1)) == 3
    assert current_season(date(2026, 10, 19)) == 4


def test_milestones():
    assert milestone_progress(150, 300) == pytest.approx(50.0)
    assert milestone_progress(900, 300) == 100.0
    [event] = active_seasonal_events(date(2026, 3, 21))
    view = seasonal_event_view(event, score=160)
    assert [m['reached'] for m in view['milestones']] == [True, True, False]


def test_sign_in_streak():
    first = advance_sign_in(None, 0, date(2026, 5, 1))
    assert (first.streak, first.is_new_day) == (1, True)
    assert first.reward.reward == 100

    same_day = advance_sign_in(date(2026, 5, 1), 1, date(2026, 5, 1))
    assert (same_day.streak, same_day.is_new_day) == (1, False)

    next_day = advance_sign_in(date(2026, 5, 1), 1, date(2026, 5, 2))
    assert next_day.streak == 2

    wrapped = advance_sign_in(date(2026, 5, 7), 7, date(2026, 5, 8))
    assert wrapped.streak == 1

    gap = advance_sign_in(date(2026, 5, 1), 4, date(2026, 5, 5))
    assert gap.streak == 1


def test_sign_in_streak_out_of_range_is_clamped():
    stale = advance_sign_in(date(2026, 5, 1), 9, date(2026, 5, 1))
    assert stale.streak == 7
    assert stale.reward is not None

    low = advance_sign_in(date(2026, 5, 1), 0, date(2026, 5, 2))
    assert low.streak == 2
    assert low.reward.reward == 150

    high = advance_sign_in(date(2026, 5, 1), 40, date(2026, 5, 2))
    assert high.streak == 1


def test_sign_in_calendar():
    calendar = sign_in_calendar(3, claimed_days=[1, 2])
    assert len(calendar) == 7
    assert [d['claimed'] for d in calendar[:3]] == [True, True, False]
    assert calendar[2]['current']
