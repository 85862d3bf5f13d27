"""
Advisor authentication — static API key plus in-memory bearer sessions.

Credentials are checked in order:
  1. ``x-advisor-key`` equal to the configured key → implicit admin, no expiry
  2. ``Authorization: Bearer <token>`` for a live session → that user's role

Sessions live only in this process; a restart logs everyone out.
"""
import hmac
import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from leaddesk.errors import AuthenticationError, AuthorizationError
from leaddesk.models.audit_event import Actor

logger = logging.getLogger('services.auth')

API_KEY_USER_ID = 'api-key'


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    username: str
    role: str
    created_at: float
    expires_at: float

    def expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class Identity:
    """Who is making an authenticated request."""
    user_id: str
    username: str
    role: str
    auth_type: str
    token: Optional[str] = None

    def to_actor(self) -> Actor:
        return Actor(type='user', username=self.username, role=self.role)

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.user_id,
            'username': self.username,
            'role': self.role,
            'authType': self.auth_type,
        }


def _matches(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode('utf-8'), expected.encode('utf-8'))


class AuthManager:
    """
    Issues and validates advisor sessions.

    ``users`` is the fixed directory of dicts with id/username/password/role.
    ``clock`` returns wall-clock seconds and is swappable in tests.
    """

    def __init__(
        self,
        users: Iterable[Dict[str, str]],
        api_key: Optional[str],
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self._users: List[Dict[str, str]] = [dict(u) for u in users]
        self._api_key = api_key or ''
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    # ── Sessions ──────────────────────────────────────────────────────

    def login(self, username: str, password: str) -> Session:
        """Check credentials and open a new session."""
        user = self._find_user(username, password)
        if user is None:
            logger.warning("Failed login for username=%r", username)
            raise AuthenticationError('Invalid credentials.')

        purged = self.purge_expired()
        if purged:
            logger.info("Dropped %d expired sessions", purged)

        now = self._clock()
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user['id'],
            username=user['username'],
            role=user['role'],
            created_at=now,
            expires_at=now + self.ttl_seconds,
        )
        with self._lock:
            self._sessions[session.token] = session
        logger.info("Session opened for %s (role=%s)", session.username, session.role)
        return session

    def logout(self, token: Optional[str]) -> bool:
        """Drop a session. Unknown or missing tokens are not an error."""
        if not token:
            return False
        with self._lock:
            removed = self._sessions.pop(token, None)
        if removed:
            logger.info("Session closed for %s", removed.username)
        return removed is not None

    def get_session(self, token: Optional[str]) -> Optional[Session]:
        """Live session for a token; expired sessions are dropped on sight."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expired(self._clock()):
                del self._sessions[token]
                return None
            return session

    def purge_expired(self) -> int:
        """Drop every expired session. Called on each login."""
        now = self._clock()
        with self._lock:
            stale = [t for t, s in self._sessions.items() if s.expired(now)]
            for token in stale:
                del self._sessions[token]
        return len(stale)

    # ── Request authentication ───────────────────────────────────────

    def authenticate(self, advisor_key: Optional[str], bearer_token: Optional[str]) -> Identity:
        """Resolve request credentials to an Identity or raise AuthenticationError."""
        if advisor_key and self._api_key and _matches(advisor_key, self._api_key):
            return Identity(
                user_id=API_KEY_USER_ID,
                username=API_KEY_USER_ID,
                role='admin',
                auth_type='api_key',
            )

        session = self.get_session(bearer_token)
        if session is not None:
            return Identity(
                user_id=session.user_id,
                username=session.username,
                role=session.role,
                auth_type='session',
                token=session.token,
            )

        raise AuthenticationError()

    def _find_user(self, username: str, password: str) -> Optional[Dict[str, str]]:
        if not username or not password:
            return None
        for user in self._users:
            if user['username'] == username and _matches(password, user['password']):
                return user
        return None


def require_role(identity: Identity, roles: Iterable[str]):
    """Raise AuthorizationError unless the identity holds one of ``roles``."""
    if identity.role not in roles:
        raise AuthorizationError()
