from datetime import date

from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required

from organic_life import db, get_rng, get_sessions, get_wall_clock, socketio
from organic_life.content.biomolecules import ALL_BIOMOLECULES, ALL_MONOMERS, get_monomer, get_recipe
from organic_life.content.cells import ALL_CELL_TYPES, get_cell
from organic_life.content.challenges import get_sign_in_reward
from organic_life.models import GameProgress
from organic_life.services.game.achievements import achievements_view, total_achievement_points, unlocked_achievements
from organic_life.services.game.challenges import (
    SIGN_IN_CYCLE_DAYS,
    TimedChallenge,
    active_seasonal_events,
    advance_sign_in,
    complete_timed_challenge,
    current_season,
    daily_challenge_met,
    generate_random_timed_challenge,
    is_expired,
    limited_achievements_status,
    seasonal_event_view,
    sign_in_calendar,
    timed_challenge_view,
    todays_challenges,
)
from organic_life.services.game.evolution import available_cells, cell_evolution_progress, is_cell_available
from organic_life.services.game.sessions import SessionNotFound
from organic_life.services.game.synthesis import assemble_monomer, synthesize


game = Blueprint('game', __name__)


@game.errorhandler(SessionNotFound)
def _session_not_found(exc):
    return jsonify({'error': 'Game session not found'}), 404


@game.errorhandler(ValueError)
def _bad_value(exc):
    return jsonify({'error': str(exc)}), 400


def _emit_state(store):
    socketio.emit('state_update', {'session_id': store.session_id},
                  to=f"session:{store.session_id}", namespace='/ws')


def _json_body():
    """The request body as a dict; an empty body reads as {}."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _position(data):
    try:
        return (float(data.get('x', 0)), float(data.get('y', 0)))
    except (TypeError, ValueError):
        return (0.0, 0.0)


def _int_field(data, name, default=None):
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f'{name} must be an integer')
    return value


def _today():
    raw = request.args.get('date')
    if raw:
        return date.fromisoformat(raw)
    return date.today()


def _state_payload(store):
    s = store.state
    progress = cell_evolution_progress(s.level, s.score)
    payload = store.to_dict()
    payload['evolution'] = progress.to_dict()
    payload['available_cells'] = [c.id for c in available_cells(s.level, s.score)]
    payload['achievement_points'] = total_achievement_points(store.stats())
    return payload


# ---- catalog ----

@game.route('/catalog', methods=['GET'])
def catalog():
    return jsonify({
        'recipes': [r.to_dict() for r in ALL_BIOMOLECULES],
        'monomers': [m.to_dict() for m in ALL_MONOMERS],
        'cells': [c.to_dict() for c in ALL_CELL_TYPES],
    })


@game.route('/seasonal-events', methods=['GET'])
def seasonal_events():
    today = _today()
    score = request.args.get('score', 0, type=int)
    return jsonify({
        'season': current_season(today),
        'events': [seasonal_event_view(e, score) for e in active_seasonal_events(today)],
    })


# ---- session lifecycle ----

@game.route('/sessions', methods=['POST'])
def create_session():
    data = _json_body()
    sessions = get_sessions()
    sessions.sweep()
    snapshot = None
    if data.get('restore') and current_user.is_authenticated:
        progress = GameProgress.query.filter_by(user_id=current_user.id).first()
        snapshot = progress.to_snapshot() if progress else None
    store = sessions.create(snapshot=snapshot)
    return jsonify(_state_payload(store)), 201


@game.route('/sessions/<string:session_id>', methods=['GET'])
def get_state(session_id):
    store = get_sessions().get(session_id)
    return jsonify(_state_payload(store))


@game.route('/sessions/<string:session_id>', methods=['DELETE'])
def dispose_session(session_id):
    if not get_sessions().dispose(session_id):
        raise SessionNotFound(session_id)
    return jsonify({'success': True})


@game.route('/sessions/<string:session_id>/reset', methods=['POST'])
def reset_session(session_id):
    sessions = get_sessions()
    store = sessions.get(session_id)
    store.reset()
    sessions.extras(session_id).clear()
    _emit_state(store)
    return jsonify(_state_payload(store))


# ---- resources ----

@game.route('/sessions/<string:session_id>/elements/add', methods=['POST'])
def add_element(session_id):
    data = _json_body()
    store = get_sessions().get(session_id)
    store.add_element(data.get('symbol'), _int_field(data, 'amount', 1))
    _emit_state(store)
    return jsonify(_state_payload(store))


@game.route('/sessions/<string:session_id>/elements/remove', methods=['POST'])
def remove_element(session_id):
    data = _json_body()
    store = get_sessions().get(session_id)
    ok = store.remove_element(data.get('symbol'), _int_field(data, 'amount', 1))
    if ok:
        _emit_state(store)
    return jsonify({
        'success': ok,
        'message': 'Element removed' if ok else 'Not enough of that element',
        'state': _state_payload(store),
    })


@game.route('/sessions/<string:session_id>/energy', methods=['POST'])
def update_energy(session_id):
    data = _json_body()
    store = get_sessions().get(session_id)
    store.update_energy(_int_field(data, 'delta'))
    _emit_state(store)
    return jsonify(_state_payload(store))


@game.route('/sessions/<string:session_id>/health', methods=['POST'])
def update_health(session_id):
    data = _json_body()
    store = get_sessions().get(session_id)
    store.update_health(_int_field(data, 'delta'))
    _emit_state(store)
    return jsonify(_state_payload(store))


# ---- synthesis ----

@game.route('/sessions/<string:session_id>/synthesize', methods=['POST'])
def synthesize_molecule(session_id):
    data = _json_body()
    recipe = get_recipe(data.get('recipe_id'))
    if recipe is None:
        return jsonify({'error': 'Unknown recipe'}), 400
    store = get_sessions().get(session_id)
    result = synthesize(store, recipe, _position(data))
    if result.success:
        store.unlock_available_cells()
        _emit_state(store)
    payload = result.to_dict()
    payload['state'] = _state_payload(store)
    return jsonify(payload)


@game.route('/sessions/<string:session_id>/monomers', methods=['POST'])
def create_monomer(session_id):
    data = _json_body()
    definition = get_monomer(data.get('monomer_id'))
    if definition is None:
        return jsonify({'error': 'Unknown monomer'}), 400
    store = get_sessions().get(session_id)
    result = assemble_monomer(store, definition, _position(data))
    if result.success:
        store.unlock_available_cells()
        _emit_state(store)
    payload = result.to_dict()
    payload['state'] = _state_payload(store)
    return jsonify(payload)


# ---- cells and achievements ----

@game.route('/sessions/<string:session_id>/cell', methods=['POST'])
def switch_cell(session_id):
    data = _json_body()
    cell = get_cell(data.get('cell_id'))
    if cell is None:
        return jsonify({'error': 'Unknown cell type'}), 400
    store = get_sessions().get(session_id)
    # the store does not check eligibility; do it here
    if not is_cell_available(cell, store.state.level, store.state.score):
        return jsonify({'error': f'{cell.name} is still locked'}), 403
    store.unlock_available_cells()
    store.switch_cell(cell.id)
    _emit_state(store)
    return jsonify(_state_payload(store))


@game.route('/sessions/<string:session_id>/evolution', methods=['GET'])
def evolution(session_id):
    store = get_sessions().get(session_id)
    s = store.state
    return jsonify({
        'progress': cell_evolution_progress(s.level, s.score).to_dict(),
        'available': [c.to_dict() for c in available_cells(s.level, s.score)],
        'current_cell_id': s.current_cell_id,
    })


@game.route('/sessions/<string:session_id>/achievements', methods=['GET'])
def achievements(session_id):
    limit = request.args.get('limit', 3, type=int)
    store = get_sessions().get(session_id)
    extras = get_sessions().extras(session_id)
    payload = achievements_view(store.stats(), limit=limit)
    payload['limited'] = limited_achievements_status(extras.get('limited_achievements', ()))
    return jsonify(payload)


# ---- timed challenges ----

@game.route('/sessions/<string:session_id>/timed-challenge', methods=['POST'])
def start_timed_challenge(session_id):
    data = _json_body()
    sessions = get_sessions()
    sessions.get(session_id)
    extras = sessions.extras(session_id)
    clock = get_wall_clock()
    current = extras.get('timed_challenge')
    if current and not current.completed and not is_expired(current, clock.now_ms()) and not data.get('replace'):
        return jsonify({'error': 'A timed challenge is already running'}), 409
    challenge = generate_random_timed_challenge(clock=clock, rng=get_rng(), type_key=data.get('type'))
    extras['timed_challenge'] = challenge
    current_app.logger.info(f"[timed-challenge] session={session_id} type={challenge.type} start")
    return jsonify(timed_challenge_view(challenge, clock.now_ms())), 201


@game.route('/sessions/<string:session_id>/timed-challenge', methods=['GET'])
def timed_challenge_status(session_id):
    sessions = get_sessions()
    sessions.get(session_id)
    challenge = sessions.extras(session_id).get('timed_challenge')
    if challenge is None:
        return jsonify(None)
    return jsonify(timed_challenge_view(challenge, get_wall_clock().now_ms()))


@game.route('/sessions/<string:session_id>/timed-challenge/restore', methods=['POST'])
def restore_timed_challenge(session_id):
    data = _json_body()
    sessions = get_sessions()
    sessions.get(session_id)
    try:
        challenge = TimedChallenge.from_dict(data)
    except (KeyError, TypeError) as exc:
        return jsonify({'error': f'Invalid challenge payload: {exc}'}), 400
    now = get_wall_clock().now_ms()
    if is_expired(challenge, now):
        return jsonify({'error': 'Challenge expired'}), 410
    sessions.extras(session_id)['timed_challenge'] = challenge
    return jsonify(timed_challenge_view(challenge, now))


@game.route('/sessions/<string:session_id>/timed-challenge/complete', methods=['POST'])
def finish_timed_challenge(session_id):
    sessions = get_sessions()
    store = sessions.get(session_id)
    extras = sessions.extras(session_id)
    challenge = extras.get('timed_challenge')
    if challenge is None:
        return jsonify({'error': 'No timed challenge running'}), 404
    outcome = complete_timed_challenge(challenge, store.state.score, get_wall_clock().now_ms())
    extras['timed_challenge'] = outcome.challenge
    if outcome.success:
        store.award_points(outcome.reward)
        if outcome.limited_achievement:
            unlocked = extras.setdefault('limited_achievements', [])
            if outcome.limited_achievement not in unlocked:
                unlocked.append(outcome.limited_achievement)
        _emit_state(store)
    return jsonify({
        'success': outcome.success,
        'message': outcome.message,
        'reward': outcome.reward,
        'limited_achievement': outcome.limited_achievement,
        'challenge': outcome.challenge.to_dict(),
    })


# ---- daily challenges and sign-in ----

@game.route('/sessions/<string:session_id>/daily-challenges', methods=['GET'])
def daily_challenges(session_id):
    sessions = get_sessions()
    store = sessions.get(session_id)
    today = _today()
    claimed = sessions.extras(session_id).get('daily_claimed', {}).get(today.isoformat(), [])
    return jsonify([
        dict(c.to_dict(), met=daily_challenge_met(c, store.state.score), claimed=c.id in claimed)
        for c in todays_challenges(today)
    ])


@game.route('/sessions/<string:session_id>/daily-challenges/<string:challenge_id>/claim', methods=['POST'])
def claim_daily_challenge(session_id, challenge_id):
    sessions = get_sessions()
    store = sessions.get(session_id)
    today = _today()
    challenge = next((c for c in todays_challenges(today) if c.id == challenge_id), None)
    if challenge is None:
        return jsonify({'error': 'Not one of today\'s challenges'}), 404
    claimed = sessions.extras(session_id).setdefault('daily_claimed', {}).setdefault(today.isoformat(), [])
    if challenge.id in claimed:
        return jsonify({'success': False, 'message': 'Reward already claimed'})
    if not daily_challenge_met(challenge, store.state.score):
        return jsonify({'success': False, 'message': 'Challenge not completed yet'})
    claimed.append(challenge.id)
    store.award_points(challenge.reward_score + challenge.reward_bonus)
    _emit_state(store)
    return jsonify({'success': True, 'message': f'Claimed {challenge.name}', 'state': _state_payload(store)})


@game.route('/sessions/<string:session_id>/sign-in', methods=['POST'])
def sign_in(session_id):
    sessions = get_sessions()
    sessions.get(session_id)
    extras = sessions.extras(session_id)
    data = _json_body()
    # clients may hand back their locally persisted streak
    last_raw = data.get('last_date', extras.get('sign_in_last_date'))
    if last_raw is not None and not isinstance(last_raw, str):
        raise ValueError('last_date must be an ISO date string')
    last_date = date.fromisoformat(last_raw) if last_raw else None
    streak = data.get('streak', extras.get('sign_in_streak', 1))
    if isinstance(streak, bool) or not isinstance(streak, int) or not 1 <= streak <= SIGN_IN_CYCLE_DAYS:
        raise ValueError(f'streak must be an integer between 1 and {SIGN_IN_CYCLE_DAYS}')
    status = advance_sign_in(last_date, streak, _today())
    if status.is_new_day:
        extras['sign_in_claimed'] = [d for d in extras.get('sign_in_claimed', []) if d < status.streak]
    extras['sign_in_last_date'] = status.last_date.isoformat()
    extras['sign_in_streak'] = status.streak
    return jsonify({
        'streak': status.streak,
        'last_date': status.last_date.isoformat(),
        'is_new_day': status.is_new_day,
        'calendar': sign_in_calendar(status.streak, extras.get('sign_in_claimed', [])),
    })


@game.route('/sessions/<string:session_id>/sign-in/claim', methods=['POST'])
def claim_sign_in(session_id):
    sessions = get_sessions()
    store = sessions.get(session_id)
    extras = sessions.extras(session_id)
    streak = extras.get('sign_in_streak')
    if streak is None:
        return jsonify({'error': 'Sign in first'}), 400
    claimed = extras.setdefault('sign_in_claimed', [])
    if streak in claimed:
        return jsonify({'success': False, 'message': 'Today\'s reward is already claimed'})
    reward = get_sign_in_reward(streak)
    if reward is None:
        return jsonify({'error': 'No reward for this streak day'}), 400
    claimed.append(streak)
    store.award_points(reward.reward)
    _emit_state(store)
    return jsonify({'success': True, 'reward': reward.to_dict(), 'state': _state_payload(store)})


# ---- persisted progress ----

@game.route('/progress', methods=['GET'])
@login_required
def load_progress():
    progress = GameProgress.query.filter_by(user_id=current_user.id).first()
    return jsonify(progress.to_dict() if progress else None)


@game.route('/progress', methods=['PUT'])
@login_required
def save_progress():
    data = _json_body()
    store = get_sessions().get(data.get('session_id') or '')
    progress = GameProgress.query.filter_by(user_id=current_user.id).first()
    if progress is None:
        progress = GameProgress(user_id=current_user.id)
        db.session.add(progress)
    achievement_ids = [a.id for a in unlocked_achievements(store.stats())]
    progress.apply_snapshot(store.snapshot(), achievement_ids)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception(f"[progress-save] user={current_user.id} failed")
        return jsonify({'error': 'Could not save progress'}), 500
    current_app.logger.info(f"[progress-save] user={current_user.id} session={store.session_id}")
    return jsonify(progress.to_dict())
