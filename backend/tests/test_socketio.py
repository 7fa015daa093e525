def _names(events):
    return [e['name'] for e in events]


def test_socket_connect_and_join(sio_client, client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    sid = client.post('/api/game/sessions').get_json()['session_id']
    sio_client.emit('join_session', {'session_id': sid}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert 'connected' in _names(received) or 'joined' in _names(received)
    joined = [e for e in received if e['name'] == 'joined']
    assert joined[0]['args'][0] == {'room': f'session:{sid}'}


def test_join_unknown_session_errors(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_session', {'session_id': 'missing'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert _names(received) == ['error']


def test_state_update_pushed_to_session_room(sio_client, client):
    sid = client.post('/api/game/sessions').get_json()['session_id']
    sio_client.emit('join_session', {'session_id': sid}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post(f'/api/game/sessions/{sid}/synthesize', json={'recipe_id': 'glucose'})
    received = sio_client.get_received('/ws')
    updates = [e for e in received if e['name'] == 'state_update']
    assert updates and updates[0]['args'][0] == {'session_id': sid}


def test_submit_score_ack_echoes_token(sio_client):
    sio_client.emit('join_leaderboard', {}, namespace='/ws')
    sio_client.get_received('/ws')

    ack = sio_client.emit('submit_score', {
        'playerName': 'Socket Sam', 'score': 4100, 'level': 9, 'cellType': 'Fungal Cell',
        'request_token': 'req-1',
    }, namespace='/ws', callback=True)
    assert ack['success'] is True
    assert ack['rank'] == 4
    assert ack['request_token'] == 'req-1'

    received = sio_client.get_received('/ws')
    assert 'leaderboard_update' in _names(received)


def test_submit_score_ack_reports_validation_error(sio_client):
    ack = sio_client.emit('submit_score', {'playerName': '', 'request_token': 'req-2'},
                          namespace='/ws', callback=True)
    assert ack['success'] is False
    assert ack['request_token'] == 'req-2'



def test_non_object_payloads_get_errors(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_session', ['abc'], namespace='/ws')
    sio_client.emit('leave_session', 'abc', namespace='/ws')
    assert _names(sio_client.get_received('/ws')) == ['error', 'error']

    ack = sio_client.emit('submit_score', ['Ada', 10], namespace='/ws', callback=True)
    assert ack['success'] is False
    assert ack['request_token'] is None

def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert received[0]['name'] == 'pong'
    assert received[0]['args'][0] == {'n': 1}


def test_owner_disconnect_ends_session(flask_app, sio_client, client):
    sid = client.post('/api/game/sessions').get_json()['session_id']

    from organic_life import socketio as _sio
    owner = _sio.test_client(flask_app, namespace='/ws')
    owner.emit('join_session', {'session_id': sid, 'is_session_owner': True}, namespace='/ws')

    # Spectator joins
    sio_client.emit('join_session', {'session_id': sid}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    # Under TESTING the session ends as soon as the last owner leaves
    owner.disconnect(namespace='/ws')
    events = sio_client.get_received('/ws')
    assert 'session_ended' in _names(events)
    assert client.get(f'/api/game/sessions/{sid}').status_code == 404


def test_owner_leave_ends_session(flask_app, client):
    sid = client.post('/api/game/sessions').get_json()['session_id']
    from organic_life import socketio as _sio
    owner = _sio.test_client(flask_app, namespace='/ws')
    owner.emit('join_session', {'session_id': sid, 'is_session_owner': True}, namespace='/ws')
    owner.emit('leave_session', {'session_id': sid}, namespace='/ws')
    assert 'left' in _names(owner.get_received('/ws'))
    assert client.get(f'/api/game/sessions/{sid}').status_code == 404
    owner.disconnect(namespace='/ws')
