from flask import Blueprint, jsonify, request, current_app
from organic_life import get_leaderboard, socketio

leaderboard = Blueprint('leaderboard', __name__)

MAX_PAGE_SIZE = 100
MAX_NAME_LENGTH = 50


def entry_json(entry):
    return {
        'rank': entry.rank,
        'playerName': entry.player_name,
        'score': entry.score,
        'level': entry.level,
        'date': entry.date,
        'cellType': entry.cell_type,
    }


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_submission(data):
    """Return (payload, error) for a submitScore request body."""
    player_name = data.get('playerName')
    score = data.get('score')
    level = data.get('level')
    cell_type = data.get('cellType')
    if not isinstance(player_name, str) or not player_name.strip():
        return None, 'playerName is required'
    player_name = player_name.strip()
    if len(player_name) > MAX_NAME_LENGTH:
        return None, f'playerName must be at most {MAX_NAME_LENGTH} characters'
    if not _is_int(score) or score < 0:
        return None, 'score must be an integer >= 0'
    if not _is_int(level) or level < 1:
        return None, 'level must be an integer >= 1'
    if not isinstance(cell_type, str):
        return None, 'cellType is required'
    return {'player_name': player_name, 'score': score, 'level': level, 'cell_type': cell_type}, None


@leaderboard.route('', methods=['GET'])
def get_global_leaderboard():
    try:
        limit = int(request.args.get('limit', 10))
        offset = int(request.args.get('offset', 0))
    except ValueError:
        return jsonify({'error': 'limit and offset must be integers'}), 400
    if not 1 <= limit <= MAX_PAGE_SIZE:
        return jsonify({'error': f'limit must be between 1 and {MAX_PAGE_SIZE}'}), 400
    if offset < 0:
        return jsonify({'error': 'offset must be >= 0'}), 400
    page = get_leaderboard().get_global_leaderboard(limit=limit, offset=offset)
    return jsonify({
        'leaderboard': [entry_json(e) for e in page['leaderboard']],
        'total': page['total'],
        'hasMore': page['has_more'],
    })


@leaderboard.route('/submit', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    payload, error = validate_submission(data)
    if error:
        return jsonify({'error': error}), 400
    result = get_leaderboard().submit_score(**payload)
    if result.success:
        socketio.emit('leaderboard_update', {'rank': result.rank}, to='leaderboard', namespace='/ws')
    current_app.logger.info(f"[leaderboard-submit] player={payload['player_name']!r} success={result.success}")
    return jsonify(result.to_dict())


@leaderboard.route('/player', methods=['GET'])
def get_player_rank():
    player_name = (request.args.get('playerName') or '').strip()
    if not player_name or len(player_name) > MAX_NAME_LENGTH:
        return jsonify({'error': f'playerName must be 1..{MAX_NAME_LENGTH} characters'}), 400
    entry = get_leaderboard().get_player_rank(player_name)
    return jsonify(entry_json(entry) if entry else None)


@leaderboard.route('/stats', methods=['GET'])
def get_stats():
    stats = get_leaderboard().get_stats()
    return jsonify({
        'totalPlayers': stats['total_players'],
        'avgScore': stats['avg_score'],
        'maxScore': stats['max_score'],
        'minScore': stats['min_score'],
        'topPlayer': stats['top_player'],
    })
