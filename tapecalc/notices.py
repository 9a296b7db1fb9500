"""Transient error notices.

The engine only reports errors; showing one for a few seconds and then
hiding it is presentation work. A NoticeBoard holds at most one notice, and
posting a new one replaces the old notice together with its expiry.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

DEFAULT_NOTICE_SECONDS = 3.0


@dataclass(frozen=True)
class Notice:
    message: str
    expires_at: float


class NoticeBoard:
    """Single-slot holder for a self-expiring message."""

    def __init__(
        self,
        timeout_s: float = DEFAULT_NOTICE_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.timeout_s = timeout_s
        self._clock = clock or time.monotonic
        self._notice: Optional[Notice] = None

    def post(self, message: str) -> Notice:
        self._notice = Notice(message=message, expires_at=self._clock() + self.timeout_s)
        return self._notice

    def current(self) -> Optional[str]:
        """The visible message, or None once its window has passed."""
        if self._notice is None:
            return None
        if self._clock() >= self._notice.expires_at:
            self._notice = None
            return None
        return self._notice.message

    def dismiss(self) -> None:
        self._notice = None
