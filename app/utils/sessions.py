"""
Per-session conversation state kept in process memory.

Each session (one per Telegram chat / socket) holds an append-only history of
turns and a free-form context dict. Nothing is persisted: sessions live until
they are cleared or the process restarts.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Tuple

from loguru import logger

Role = Literal["user", "assistant"]
ROLES = ("user", "assistant")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str
    timestamp: datetime


@dataclass
class ConversationSession:
    session_id: str
    created_at: datetime = field(default_factory=utc_now)
    context: Dict[str, Any] = field(default_factory=dict)
    _history: List[Turn] = field(default_factory=list, repr=False)

    @property
    def history(self) -> Tuple[Turn, ...]:
        """Turns in the order they were appended."""
        return tuple(self._history)

    def append_turn(self, role: Role, content: str, timestamp: Optional[datetime] = None) -> Turn:
        if role not in ROLES:
            raise ValueError(f"Unknown role {role!r}, expected one of {ROLES}")
        turn = Turn(role=role, content=content, timestamp=timestamp or utc_now())
        self._history.append(turn)
        return turn

    def clear(self) -> None:
        self._history.clear()
        self.context.clear()


class SessionStore:
    """Sessions keyed by session id. Not shared between assistants."""

    def __init__(self):
        self._sessions: Dict[str, ConversationSession] = {}

    def get(self, session_id: str) -> Optional[ConversationSession]:
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> ConversationSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = ConversationSession(session_id=session_id)
            self._sessions[session_id] = session
            logger.debug(f"Created session {session_id}")
        return session

    def clear(self, session_id: str) -> bool:
        """Resets history and context. Returns False if the session is unknown."""
        session = self._sessions.get(session_id)
        if session is None:
            return False
        session.clear()
        logger.info(f"Session {session_id} cleared")
        return True

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
