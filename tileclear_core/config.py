from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .board import Shape
from .generate import DEFAULT_MAX_ATTEMPTS
from .state import Mode

START_TIME = 120
PENALTY_SECONDS = 10

_TRUTHY = ("1", "true", "yes", "on")


def env_flag(name: str, default: str = "0", environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(name, default).strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class GameConfig:
    start_time: int = START_TIME
    penalty_seconds: int = PENALTY_SECONDS
    max_generation_attempts: int = DEFAULT_MAX_ATTEMPTS
    default_shape: Shape = Shape.TALL
    default_mode: Mode = Mode.TIMED

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'GameConfig':
        """Reads TILECLEAR_* overrides; unset variables keep the defaults."""
        env = os.environ if environ is None else environ
        return cls(
            start_time=_env_int(env, "TILECLEAR_START_TIME", START_TIME, 1),
            penalty_seconds=_env_int(env, "TILECLEAR_PENALTY", PENALTY_SECONDS, 0),
            max_generation_attempts=_env_int(env, "TILECLEAR_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS, 1),
            default_shape=Shape.parse(env.get("TILECLEAR_SHAPE") or Shape.TALL),
            default_mode=Mode.parse(env.get("TILECLEAR_MODE") or Mode.TIMED),
        )


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    """Entrypoint logging setup; library modules only create loggers."""
    level = logging.DEBUG if env_flag("TILECLEAR_DEBUG", environ=environ) else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
