"""Runtime settings for tapecalc.

Read from TAPECALC_* environment variables; CLI options override them.
Self-contained — no external dependencies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tapecalc.engine import DEFAULT_HISTORY_LIMIT
from tapecalc.notices import DEFAULT_NOTICE_SECONDS

_ENV_PREFIX = "TAPECALC_"


@dataclass
class Settings:
    notice_seconds: float = DEFAULT_NOTICE_SECONDS
    history_limit: int = DEFAULT_HISTORY_LIMIT

    def validate(self) -> None:
        if not self.notice_seconds > 0:
            raise ValueError("notice_seconds must be > 0")
        if self.history_limit < 1:
            raise ValueError("history_limit must be >= 1")


def _read(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}{name}: cannot parse {raw!r}") from None


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    notice_seconds: Optional[float] = None,
    history_limit: Optional[int] = None,
) -> Settings:
    """Build validated Settings from the environment plus explicit overrides.

    Args:
        env: Mapping to read from. Defaults to os.environ.
        notice_seconds: Overrides TAPECALC_NOTICE_SECONDS.
        history_limit: Overrides TAPECALC_HISTORY_LIMIT.

    Raises:
        ValueError: a value is unparsable or out of range.
    """
    env = os.environ if env is None else env
    settings = Settings(
        notice_seconds=_read(env, "NOTICE_SECONDS", float, DEFAULT_NOTICE_SECONDS),
        history_limit=_read(env, "HISTORY_LIMIT", int, DEFAULT_HISTORY_LIMIT),
    )
    if notice_seconds is not None:
        settings.notice_seconds = notice_seconds
    if history_limit is not None:
        settings.history_limit = history_limit
    settings.validate()
    return settings
