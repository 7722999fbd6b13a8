import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .errors import ConfigurationError

_ENV_PREFIX = "LAYOUT_"
_FALSY = {"0", "false", "no", "off", ""}


@dataclass
class LayoutConfig:
    width: int = 20
    height: int = 20
    scattered_rooms: int = 8
    seed: Optional[int] = None
    enable_metrics: bool = True
    catalog_path: Optional[str] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"layout size must be positive, got {self.width}x{self.height}")
        if self.scattered_rooms < 0:
            raise ConfigurationError(f"scattered_rooms must be >= 0, got {self.scattered_rooms}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "LayoutConfig":
        """Build a config from ``LAYOUT_*`` variables; explicit overrides win.

        ``LAYOUT_CATALOG`` maps onto ``catalog_path``; every other field reads
        ``LAYOUT_<FIELD>``.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = _ENV_PREFIX + ("CATALOG" if f.name == "catalog_path" else f.name.upper())
            raw = env.get(key)
            if raw is None:
                continue
            raw = raw.strip()
            if f.name == "enable_metrics":
                values[f.name] = raw.lower() not in _FALSY
            elif f.name == "catalog_path":
                values[f.name] = raw or None
            elif f.name == "seed" and not raw:
                values[f.name] = None
            else:
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["LayoutConfig"]
