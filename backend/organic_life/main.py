import secrets
from datetime import datetime, timezone
from urllib.parse import urlencode

from flask import Blueprint, current_app, jsonify, redirect, request, session
from flask_login import current_user, login_user, logout_user

from . import oauth
from .models import db, User

main = Blueprint('main', __name__)

OAUTH_STATE_KEY = 'oauth_state'


def _redirect_uri():
    return f"{current_app.config.get('APP_DOMAIN', 'http://localhost:3000')}/api/oauth/callback"


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Organic Life game server!'})


@main.route('/api/auth/login')
def login():
    cfg = current_app.config
    # one-time state, checked by the callback
    state = secrets.token_urlsafe(24)
    session[OAUTH_STATE_KEY] = state
    query = urlencode({
        'client_id': cfg.get('APP_ID'),
        'redirect_uri': _redirect_uri(),
        'state': state,
        'response_type': 'code',
    })
    authorization_url = f"{cfg.get('OAUTH_SERVER_URL')}/oauth/authorize?{query}"
    current_app.logger.info(f"[oauth-login] redirect={cfg.get('OAUTH_SERVER_URL')}/oauth/authorize")
    return redirect(authorization_url, code=302)


@main.route('/api/oauth/callback')
def oauth_callback():
    code = request.args.get('code')
    state = request.args.get('state')
    expected = session.pop(OAUTH_STATE_KEY, None)
    if not code or not state or not expected or not secrets.compare_digest(state, expected):
        current_app.logger.warning('[oauth-callback] missing code or state mismatch')
        return jsonify({'error': 'Invalid OAuth callback'}), 400

    try:
        identity = oauth.exchange_code(code, _redirect_uri())
    except oauth.OAuthError as exc:
        current_app.logger.warning(f"[oauth-callback] code exchange failed: {exc}")
        return jsonify({'error': 'Login failed'}), 502

    open_id = identity['open_id']
    user = User.query.filter_by(open_id=open_id).first()
    if user is None:
        user = User(open_id=open_id)
        db.session.add(user)
    if identity.get('name'):
        user.name = identity['name']
    if identity.get('email'):
        user.email = identity['email']
    user.login_method = identity.get('login_method') or user.login_method or 'oauth'
    user.last_signed_in = datetime.now(timezone.utc)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception(f"[oauth-callback] could not store user open_id={open_id}")
        return jsonify({'error': 'Login failed'}), 500

    login_user(user, remember=True)
    current_app.logger.info(f"[oauth-callback] user={user.id} logged in")
    return redirect('/', code=302)


@main.route('/api/auth/logout', methods=['POST', 'GET'])
def logout():
    logout_user()
    cookie_name = current_app.config.get('SESSION_COOKIE_NAME', 'session')
    if request.method == 'GET':
        response = redirect('/', code=302)
    else:
        response = jsonify({'success': True})
    response.delete_cookie(cookie_name)
    response.delete_cookie('remember_token')
    return response


@main.route('/api/auth/me')
def me():
    if current_user.is_authenticated:
        return jsonify({'authenticated': True, 'name': current_user.name, 'user': current_user.to_dict()})
    return jsonify({'authenticated': False, 'name': None})
