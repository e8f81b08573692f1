from __future__ import annotations

from dataclasses import dataclass, fields
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


@dataclass
class TreeConfig:
    """
    Configuration for building and writing the ancestry tree.

    Defaults come from config.yaml in the package directory; a user YAML file
    or a dict only needs the keys it overrides.

    Attributes:
        output_path: Where the generated script is written.
        days_per_year: Divisor turning elapsed days into years.
        age_fraction_digits: Maximum fraction digits of an age label.
        function_name: Name of the generated JavaScript function.
        variable_name: Variable the tree is assigned to.
        node_constructor: Constructor called with the tree literal.
    """
    output_path: str = "web/archdale.js"
    days_per_year: float = 365.25
    age_fraction_digits: int = 3
    function_name: str = "userdata"
    variable_name: str = "fulltree"
    node_constructor: str = "midnode"

    @classmethod
    def default(cls) -> TreeConfig:
        """Load the packaged config.yaml, falling back to dataclass defaults if it is missing."""
        if not DEFAULT_CONFIG_PATH.exists():
            logger.warning(f"Default configuration file not found: {DEFAULT_CONFIG_PATH}")
            return cls()
        return cls.from_yaml(DEFAULT_CONFIG_PATH, base=cls())

    @classmethod
    def from_yaml(cls, yaml_path: Path, base: Optional[TreeConfig] = None) -> TreeConfig:
        """
        Load configuration from a specific YAML file.

        Args:
            yaml_path: Path to YAML config file.
            base: Configuration supplying values for keys the file omits.

        Returns:
            TreeConfig: Configuration instance loaded from YAML.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid YAML or has unknown keys.
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing {yaml_path}: {e}")

        if not isinstance(config_dict, dict):
            raise ValueError(f"Configuration in {yaml_path} must be a mapping")
        logger.debug(f"Loaded tree config from {yaml_path}")
        return cls.from_dict(config_dict, base=base)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], base: Optional[TreeConfig] = None) -> TreeConfig:
        """
        Create configuration from a dictionary.

        Args:
            config_dict: Dictionary with configuration values.
            base: Configuration supplying values for keys the dict omits.
                Defaults to the packaged config.yaml.

        Returns:
            TreeConfig: Configuration instance.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise ValueError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")

        base = base if base is not None else cls.default()
        values = {name: getattr(base, name) for name in known}
        values.update(config_dict)
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Check value types and ranges."""
        if not isinstance(self.days_per_year, (int, float)) or self.days_per_year <= 0:
            raise ValueError(f"days_per_year must be a positive number, got {self.days_per_year!r}")
        if not isinstance(self.age_fraction_digits, int) or self.age_fraction_digits < 0:
            raise ValueError(f"age_fraction_digits must be a non-negative integer, got {self.age_fraction_digits!r}")
        for name in ("output_path", "function_name", "variable_name", "node_constructor"):
            if not isinstance(getattr(self, name), str) or not getattr(self, name):
                raise TypeError(f"{name} must be a non-empty string")
