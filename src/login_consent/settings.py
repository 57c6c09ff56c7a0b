"""
Process configuration read from the environment (.env is loaded by main.py).

BASE_URL is only used to build form action URLs. REMEMBER_FOR_SECONDS is the
remember policy applied when a user ticks "remember me"; 0 means never expire.
SESSION_SECRET default "change-me" is for dev only.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    base_url: str = ""
    hydra_admin_url: str = "http://127.0.0.1:4445"
    admin_client_id: Optional[str] = None
    admin_client_secret: Optional[str] = None
    admin_token_url: Optional[str] = None
    admin_scope: Optional[str] = None
    admin_timeout: float = 10.0
    remember_for: int = 3600
    session_secret: str = "change-me"
    list_clients_on_startup: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        remember_for = int(os.getenv("REMEMBER_FOR_SECONDS", "3600"))
        if remember_for < 0:
            raise ValueError("REMEMBER_FOR_SECONDS must be >= 0")
        return cls(
            base_url=os.getenv("BASE_URL", ""),
            hydra_admin_url=os.getenv("HYDRA_ADMIN_URL", "http://127.0.0.1:4445"),
            admin_client_id=os.getenv("HYDRA_ADMIN_CLIENT_ID") or None,
            admin_client_secret=os.getenv("HYDRA_ADMIN_CLIENT_SECRET") or None,
            admin_token_url=os.getenv("HYDRA_ADMIN_TOKEN_URL") or None,
            admin_scope=os.getenv("HYDRA_ADMIN_SCOPE") or None,
            admin_timeout=float(os.getenv("HYDRA_ADMIN_TIMEOUT_SECONDS", "10")),
            remember_for=remember_for,
            session_secret=os.getenv("SESSION_SECRET", "change-me"),
            list_clients_on_startup=_flag("LIST_CLIENTS_ON_STARTUP"),
        )
