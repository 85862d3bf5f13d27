"""
Shared route guards and request helpers.

Guards stack in the order they run: rate limit, then auth, then role.

    @bp.route('/crm-sync/mock', methods=['POST'])
    @require_auth
    @require_role('admin')
    def crm_sync(): ...
"""
import json
import logging
from functools import wraps
from typing import Any, Dict, Optional

from flask import current_app, g, request

from leaddesk.errors import MalformedBody, RateLimitExceeded
from leaddesk.extensions import get_components
from leaddesk.services import auth

logger = logging.getLogger('routes.common')


def client_ip() -> str:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded.strip():
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def parse_json_body() -> Dict[str, Any]:
    """
    Decode the request body as a JSON object; an empty body is ``{}``.

    Oversized bodies never get here: MAX_CONTENT_LENGTH rejects them first.
    """
    raw = request.get_data(cache=True)
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        raise MalformedBody('Invalid JSON')
    if not isinstance(payload, dict):
        raise MalformedBody('JSON body must be an object')
    return payload


def bearer_token() -> Optional[str]:
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None


def advisor_key() -> Optional[str]:
    return request.headers.get('x-advisor-key', '').strip() or None


def current_identity() -> auth.Identity:
    return g.identity


def rate_limited(route_key: str, message: str):
    """Refuse with 429 once the client used up this route's window."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            limit, window = current_app.config['RATE_LIMITS'][route_key]
            if not get_components().rate_limiter.allow(client_ip(), route_key, limit, window):
                raise RateLimitExceeded(message)
            return view(*args, **kwargs)
        return wrapped
    return decorator


def require_auth(view):
    """Resolve the advisor key / bearer token into ``g.identity`` or 401."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        g.identity = get_components().auth.authenticate(advisor_key(), bearer_token())
        return view(*args, **kwargs)
    return wrapped


def require_role(*roles: str):
    """403 unless the authenticated identity holds one of ``roles``."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            auth.require_role(current_identity(), roles)
            return view(*args, **kwargs)
        return wrapped
    return decorator
