"""
Engine configuration.

EngineConfig holds the method selectors and the sampling resolution that
every evaluate call reads. It can be built directly, from a plain mapping
(the form a parsed TOML table takes), or loaded from a TOML file:

    [engine]
    defuzzification_method = "bisector"
    and_method = "product"
    resolution = 200

Method names are not validated here; the pipeline stages resolve unknown
names to the standard methods. The resolution must be a positive integer.
"""

import logging
import tomllib
from dataclasses import asdict, dataclass, fields
from numbers import Integral
from typing import Any, Dict, Mapping

from fuzzy_engine.errors import ConfigurationError

config_log = logging.getLogger("config")


@dataclass(frozen=True)
class EngineConfig:
    defuzzification_method: str = "centroid"
    and_method: str = "min"
    or_method: str = "max"
    implication_method: str = "min"
    aggregation_method: str = "max"
    resolution: int = 100

    def __post_init__(self) -> None:
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, Integral):
            raise ConfigurationError(f"Resolution must be an integer, got {self.resolution!r}")
        if self.resolution <= 0:
            raise ConfigurationError(f"Resolution must be positive, got {self.resolution}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """
        Builds a configuration from a mapping of field names.

        Missing keys keep their defaults; unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                config_log.warning("Ignoring unknown engine setting '%s'.", key)
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _load_toml(path: str) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_engine_config(path: str) -> EngineConfig:
    """
    Loads engine settings from a TOML file.

    The [engine] table is used when present, otherwise the top-level keys.

    Args:
        path (str): Path to the TOML file.

    Returns:
        EngineConfig: The parsed configuration.

    Raises:
        ConfigurationError: If [engine] is not a table or a value is invalid.
    """
    cfg = _load_toml(path)
    section = cfg.get("engine", cfg)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'engine' in {path} must be a table, got {type(section).__name__}")

    config = EngineConfig.from_dict(section)
    config_log.info("Engine configuration loaded from '%s': %s", path, config.to_dict())
    return config
