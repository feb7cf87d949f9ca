from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Optional

ADMIN_ROLE = "package_admin"


@dataclass(frozen=True)
class Identity:
    user_id: str
    username: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    roles: tuple[str, ...] = field(default_factory=tuple)
    credential: str = "session"
    token_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles


_current_identity: ContextVar[Optional[Identity]] = ContextVar(
    "registry_current_identity", default=None
)


def set_current_identity(identity: Optional[Identity]) -> None:
    _current_identity.set(identity)


def get_current_identity() -> Optional[Identity]:
    return _current_identity.get()
