"""
Reconstruction settings.

Values come from constructor arguments or from REVEAL_* environment
variables. The CLI layers its flags on top of from_env().
"""

import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE


def _env_int(name: str, default: int | None) -> int | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class RevealConfig:
    """Settings for a reconstruction run."""
    strict: bool = False             # Inexact interpolation is an error, not a warning
    verify: bool = False             # Check every k-subset agrees on the secret
    verify_limit: int | None = None  # Cap on subsets checked (None = all)
    strict_count: bool = False       # Declared n must match the record count
    jobs: int = 1                    # Inputs reconstructed in parallel
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {self.jobs}")
        if self.verify_limit is not None and self.verify_limit < 1:
            raise ValueError(f"verify_limit must be at least 1, got {self.verify_limit}")

    @classmethod
    def from_env(cls) -> "RevealConfig":
        return cls(
            strict=_env_flag("REVEAL_STRICT"),
            verify=_env_flag("REVEAL_VERIFY"),
            verify_limit=_env_int("REVEAL_VERIFY_LIMIT", None),
            strict_count=_env_flag("REVEAL_STRICT_COUNT"),
            jobs=_env_int("REVEAL_JOBS", 1),
            log_level=os.environ.get("REVEAL_LOG_LEVEL", "WARNING").upper(),
        )
