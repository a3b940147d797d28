"""Domain entity tracking failed logins per client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LoginAttempt:
    client_key: str
    failures: int
    first_failure_at: datetime
