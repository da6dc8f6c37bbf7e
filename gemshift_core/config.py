from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

_TRUTHY = ('1', 'true', 'yes', 'on')
_FALSY = ('0', 'false', 'no', 'off')


def parse_flag(raw: object, default: bool) -> bool:
    """Strict boolean parsing for request payloads: booleans or the usual on/off words."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text == '':
            return default
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
    raise ValueError(f'expected a boolean flag, got {raw!r}')


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


@dataclass(frozen=True)
class Settings:
    """Engine defaults taken from GEMSHIFT_* environment variables."""
    width: int = 7
    height: int = 8
    seed: Optional[int] = None
    dedupe_junctions: bool = True
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            width=env_int('GEMSHIFT_WIDTH', 7),
            height=env_int('GEMSHIFT_HEIGHT', 8),
            seed=env_int('GEMSHIFT_SEED', None),
            dedupe_junctions=env_flag('GEMSHIFT_DEDUPE_JUNCTIONS', True),
            debug=env_flag('GEMSHIFT_DEBUG', False),
        )


def configure_logging(debug: bool = False) -> None:
    """Installs a basic stderr handler; only entry points call this."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
