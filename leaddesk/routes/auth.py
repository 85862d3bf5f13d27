"""
Auth routes — advisor login, whoami, logout.
"""
import logging

from flask import Blueprint, current_app, jsonify

from leaddesk.extensions import get_components
from leaddesk.routes.common import (
    bearer_token, current_identity, parse_json_body, rate_limited, require_auth,
)
from leaddesk.services.intake import normalize_text

logger = logging.getLogger('routes.auth')

bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@bp.route('/login', methods=['POST'])
@rate_limited('login', 'Too many login attempts.')
def login():
    payload = parse_json_body()
    session = get_components().auth.login(
        normalize_text(payload.get('username')),
        normalize_text(payload.get('password')),
    )
    return jsonify({
        'ok': True,
        'token': session.token,
        'user': {'id': session.user_id, 'username': session.username, 'role': session.role},
        'expiresInMs': int(current_app.config['AUTH_TOKEN_TTL_SECONDS'] * 1000),
    })


@bp.route('/me')
@require_auth
def me():
    return jsonify({'ok': True, 'user': current_identity().to_dict()})


@bp.route('/logout', methods=['POST'])
def logout():
    """Always succeeds; a missing or unknown token is ignored."""
    get_components().auth.logout(bearer_token())
    return jsonify({'ok': True})
