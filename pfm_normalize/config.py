"""Configuration management."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any, Sequence, Tuple
import math
import os

import yaml

from pfm_normalize.core.rescaling import OutlierPolicy
from pfm_normalize.errors import ConfigurationError


_TRUE_STRINGS = {'1', 'true', 'yes', 'on'}


class Config:
    """Configuration manager."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML config file (optional)
        """
        self.config = self._load_defaults()

        if config_file is not None:
            self.load_from_file(config_file)

        # Override with environment variables
        self._load_from_env()

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration."""
        return {
            'normalization': {
                'epsilon': 0.0,
                'ignore': -1.0,
                'clamp': False,
                'minimum': None,
                'maximum': None,
            },
        }

    def load_from_file(self, config_file: Path) -> None:
        """Load configuration from YAML file."""
        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not load config file {config_file}: {e}") from e

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")
        self._merge_config(self.config, file_config)

    def _merge_config(self, base: Dict, override: Dict) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        env_mappings = {
            'PFM_NORMALIZE_EPSILON': ('normalization', 'epsilon'),
            'PFM_NORMALIZE_IGNORE': ('normalization', 'ignore'),
            'PFM_NORMALIZE_CLAMP': ('normalization', 'clamp'),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                self._set_nested(self.config, config_path, value)

    def _set_nested(self, config: Dict, path: tuple, value: Any) -> None:
        """Set nested configuration value."""
        for key in path[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]
        config[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value


def load_config(config_file: Optional[Path] = None) -> Config:
    """
    Load configuration.

    Args:
        config_file: Path to config file (optional)

    Returns:
        Config instance
    """
    return Config(config_file)


def _as_float(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def split_image_list(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma separated image list, dropping empty entries."""
    if not value:
        return ()
    return tuple(name for name in value.split(',') if name)


@dataclass(frozen=True)
class NormalizationConfig:
    """Immutable settings for one normalization run.

    Attributes:
        input_image: Name of the image to normalize.
        output_image: Destination of the normalized image.
        epsilon: Fraction of samples trimmed over both tails, in [0, 1].
        ignore: Sentinel value excluded from statistics and rescaling.
        minimum: Explicit range minimum, or None to estimate it.
        maximum: Explicit range maximum, or None to estimate it.
        policy: What to do with values outside the range.
        references: Reference image names; empty means the input image only.
    """

    input_image: str
    output_image: str
    epsilon: float = 0.0
    ignore: float = -1.0
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    policy: OutlierPolicy = OutlierPolicy.DISCARD
    references: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if math.isnan(self.epsilon) or not 0.0 <= self.epsilon <= 1.0:
            raise ConfigurationError(
                f"epsilon is supposed to be in the interval [0.0, 1.0], got {self.epsilon}"
            )
        for name, bound in (('minimum', self.minimum), ('maximum', self.maximum)):
            if bound is not None and math.isnan(bound):
                raise ConfigurationError(f"{name} must be a number, got {bound}")
        if (self.minimum is not None and self.maximum is not None
                and self.maximum < self.minimum):
            raise ConfigurationError(
                f"minimum ({self.minimum}) has to be smaller than maximum ({self.maximum})"
            )

    @classmethod
    def from_config(
        cls,
        cfg: Config,
        input_image: str,
        output_image: str,
        epsilon: Optional[float] = None,
        ignore: Optional[float] = None,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        clamp: Optional[bool] = None,
        references: Sequence[str] = (),
    ) -> "NormalizationConfig":
        """
        Build settings from explicit values, falling back to the Config.

        Explicit (command line) values take precedence over the config.

        Raises:
            ConfigurationError: If a value is malformed or out of range
        """
        if epsilon is None:
            epsilon = cfg.get('normalization.epsilon', 0.0)
        if ignore is None:
            ignore = cfg.get('normalization.ignore', -1.0)
        if minimum is None:
            minimum = cfg.get('normalization.minimum')
        if maximum is None:
            maximum = cfg.get('normalization.maximum')
        if clamp is None:
            clamp = _as_bool(cfg.get('normalization.clamp', False))

        return cls(
            input_image=str(input_image),
            output_image=str(output_image),
            epsilon=_as_float('epsilon', epsilon),
            ignore=_as_float('ignore', ignore),
            minimum=_as_float('minimum', minimum),
            maximum=_as_float('maximum', maximum),
            policy=OutlierPolicy.from_flag(clamp),
            references=tuple(references),
        )
