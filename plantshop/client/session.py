"""Client-side session: the token and role kept in local storage between runs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ClientSettings(BaseSettings):
    """Client configuration from PLANTSHOP_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLANTSHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    API_URL: str = "http://localhost:5001"
    SESSION_FILE: str = "~/.plantshop/session.json"
    TIMEOUT: float = 10.0

    @field_validator("API_URL")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        s = v.strip().rstrip("/")
        if not (s.lower().startswith("http://") or s.lower().startswith("https://")):
            raise ValueError("PLANTSHOP_API_URL must use http or https (e.g. http://localhost:5001)")
        return s

    @field_validator("TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError("PLANTSHOP_TIMEOUT must be greater than 0 and at most 120")
        return v

    @property
    def session_path(self) -> Path:
        return Path(self.SESSION_FILE).expanduser()


@dataclass
class SessionContext:
    """
    Explicit login state handed to every view.

    Load it once at startup, save it after login, clear it at logout.
    """

    path: Path
    token: str | None = None
    role: str | None = None
    email: str | None = None

    @classmethod
    def load(cls, path: Path) -> SessionContext:
        """Read the stored session; a missing or unreadable file gives an empty session."""
        session = cls(path=path)
        if not path.exists():
            return session
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", path, e)
            return session
        if isinstance(data, dict):
            session.token = data.get("token")
            session.role = data.get("role")
            session.email = data.get("email")
        return session

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"token": self.token, "role": self.role, "email": self.email}
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def start(self, token: str, role: str, email: str) -> None:
        """Record a successful login and persist it."""
        self.token = token
        self.role = role
        self.email = email
        self.save()

    def clear(self) -> None:
        """Forget the token (logout) and remove the stored session."""
        self.token = None
        self.role = None
        self.email = None
        if self.path.exists():
            self.path.unlink()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == "admin"
