"""Authorization-code exchange against the OAuth server.

The callback never trusts identity fields from its own query string; the
identity comes from the server's userinfo response for a freshly exchanged
access token.
"""
import requests
from flask import current_app

REQUEST_TIMEOUT_SEC = 5


class OAuthError(Exception):
    pass


def exchange_code(code, redirect_uri):
    """Trade an authorization code for the user's identity dict.

    Returns ``{'open_id', 'name', 'email', 'login_method'}``; raises
    ``OAuthError`` when the server rejects the code or is unreachable.
    """
    cfg = current_app.config
    base = cfg.get('OAUTH_SERVER_URL')
    try:
        token_res = requests.post(f"{base}/oauth/token", data={
            'grant_type': 'authorization_code',
            'code': code,
            'redirect_uri': redirect_uri,
            'client_id': cfg.get('APP_ID'),
            'client_secret': cfg.get('OAUTH_CLIENT_SECRET'),
        }, timeout=REQUEST_TIMEOUT_SEC)
        token_res.raise_for_status()
        access_token = token_res.json().get('access_token')
        if not access_token:
            raise OAuthError('token response carried no access_token')

        info_res = requests.get(f"{base}/oauth/userinfo",
                                headers={'Authorization': f"Bearer {access_token}"},
                                timeout=REQUEST_TIMEOUT_SEC)
        info_res.raise_for_status()
        info = info_res.json()
    except requests.RequestException as exc:
        raise OAuthError(f"OAuth server request failed: {exc}") from exc
    except ValueError as exc:
        raise OAuthError('OAuth server returned invalid JSON') from exc

    open_id = info.get('openId') or info.get('open_id')
    if not open_id:
        raise OAuthError('userinfo response carried no openId')
    return {
        'open_id': open_id,
        'name': info.get('name'),
        'email': info.get('email'),
        'login_method': info.get('loginMethod') or 'oauth',
    }
