import logging
import threading
import time
from typing import Any, Dict

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from organic_life import get_leaderboard, get_sessions, socketio
from organic_life.api.leaderboard import validate_submission

logger = logging.getLogger(__name__)

LEADERBOARD_ROOM = 'leaderboard'
OWNER_GRACE_SEC = 2.0


def handle_connect(auth=None):
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    # The last owner socket going away ends the game session
    ctx = _sid_to_ctx.pop(_get_sid(), None)
    if not ctx or not ctx.get('is_session_owner'):
        return
    session_id = ctx['session_id']
    with _owner_lock:
        _owner_count[session_id] = max(0, _owner_count.get(session_id, 0) - 1)
        remaining = _owner_count[session_id]
    if remaining:
        return
    sessions = get_sessions()
    if current_app.config.get('TESTING'):
        _end_session(sessions, session_id)
        return
    _schedule_end_if_no_owner(sessions, session_id)


def handle_join_session(data):
    data = _payload(data)
    session_id = data.get('session_id')
    is_session_owner = bool(data.get('is_session_owner'))
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    if session_id not in get_sessions():
        emit('error', {'message': 'Game session not found'})
        return
    room = _room(session_id)
    join_room(room)
    _sid_to_ctx[_get_sid()] = {'session_id': session_id, 'is_session_owner': is_session_owner}
    if is_session_owner:
        with _owner_lock:
            _owner_count[session_id] = _owner_count.get(session_id, 0) + 1
            _end_deadline.pop(session_id, None)
    emit('joined', {'room': room})


def handle_leave_session(data):
    session_id = _payload(data).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = _room(session_id)
    leave_room(room)
    emit('left', {'room': room})
    ctx = _sid_to_ctx.get(_get_sid())
    if ctx and ctx.get('session_id') == session_id and ctx.get('is_session_owner'):
        # Explicit quit: end immediately
        _sid_to_ctx.pop(_get_sid(), None)
        _end_session(get_sessions(), session_id)


def handle_join_leaderboard(data=None):
    join_room(LEADERBOARD_ROOM)
    emit('joined', {'room': LEADERBOARD_ROOM})


def handle_submit_score(data):
    """Submit over the socket; the return value is the client's ack."""
    data = _payload(data)
    token = data.get('request_token')
    payload, error = validate_submission(data)
    if error:
        return {'success': False, 'message': error, 'request_token': token}
    result = get_leaderboard().submit_score(**payload)
    if result.success:
        socketio.emit('leaderboard_update', {'rank': result.rank}, to=LEADERBOARD_ROOM, namespace='/ws')
    logger.info(f"[leaderboard-submit] via=ws player={payload['player_name']!r} success={result.success}")
    ack = result.to_dict()
    ack['request_token'] = token
    return ack


def handle_ping(data):
    emit('pong', data or {})


# ---- session owner lifecycle helpers ----

_sid_to_ctx: Dict[str, Dict[str, Any]] = {}
_owner_count: Dict[str, int] = {}
_end_deadline: Dict[str, float] = {}
_owner_lock = threading.Lock()


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _get_sid() -> str:
    return request.sid  # type: ignore


def _room(session_id: str) -> str:
    return f"session:{session_id}"


def _end_session(sessions, session_id: str) -> None:
    """Notify the room and dispose the game store."""
    socketio.emit('session_ended', {'session_id': session_id}, to=_room(session_id), namespace='/ws')
    sessions.dispose(session_id)
    with _owner_lock:
        _owner_count.pop(session_id, None)
        _end_deadline.pop(session_id, None)


def _schedule_end_if_no_owner(sessions, session_id: str, delay_sec: float = OWNER_GRACE_SEC) -> None:
    deadline = time.time() + delay_sec
    with _owner_lock:
        if _owner_count.get(session_id, 0) > 0:
            return
        _end_deadline[session_id] = deadline

    def _runner(sid: str, deadline: float):
        sleep_for = max(0.0, deadline - time.time())
        if sleep_for:
            socketio.sleep(sleep_for)
        with _owner_lock:
            still_orphaned = _owner_count.get(sid, 0) == 0 and _end_deadline.get(sid) == deadline
        if still_orphaned:
            _end_session(sessions, sid)

    socketio.start_background_task(_runner, session_id, deadline)


_HANDLERS = (
    ('connect', handle_connect),
    ('disconnect', handle_disconnect),
    ('join_session', handle_join_session),
    ('leave_session', handle_leave_session),
    ('join_leaderboard', handle_join_leaderboard),
    ('submit_score', handle_submit_score),
    ('ping', handle_ping),
)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    for event, handler in _HANDLERS:
        socketio.on_event(event, handler, namespace='/ws')

    if testing:
        for event, handler in _HANDLERS:
            socketio.on_event(event, handler, namespace='/')
