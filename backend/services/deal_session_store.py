"""
Sesiones del wizard de cierre - Guardadas solo en memoria del proceso
"""
import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Dict, Optional
from config.app_config import DEAL_SESSION_TTL_HOURS
from services.clock import get_local_now
from services.deal_wizard import DealWizard

logger = logging.getLogger(__name__)


def generate_access_token(length: int = 32) -> str:
    """Generate a secure random access token"""
    alphabet = string.ascii_letters + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))


class DealSession:
    """A wizard plus the token and timestamps that identify it"""

    def __init__(self, wizard: DealWizard, ttl_hours: int):
        self.token = generate_access_token()
        self.wizard = wizard
        self.created_at: datetime = get_local_now()
        self.expires_at: datetime = self.created_at + timedelta(hours=ttl_hours)

    @property
    def is_expired(self) -> bool:
        """Check if session has expired"""
        return get_local_now() >= self.expires_at

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            **self.wizard.to_dict(),
        }


class DealSessionStore:
    """
    Registro de sesiones por token.

    Sessions are never written to the database; closing the browser or
    discarding a session loses its progress.
    """

    def __init__(self, ttl_hours: int = DEAL_SESSION_TTL_HOURS):
        self.ttl_hours = ttl_hours
        self._sessions: Dict[str, DealSession] = {}

    def create(self) -> DealSession:
        self.cleanup()
        session = DealSession(DealWizard(), self.ttl_hours)
        self._sessions[session.token] = session
        return session

    def get(self, token: str) -> Optional[DealSession]:
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.is_expired:
            del self._sessions[token]
            return None
        return session

    def discard(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def cleanup(self) -> int:
        """Eliminar sesiones vencidas"""
        expired = [token for token, session in self._sessions.items() if session.is_expired]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.info(f"Cleaned up {len(expired)} expired deal sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


deal_sessions = DealSessionStore()
