import os
import re
import yaml
from dotenv import load_dotenv
from pathlib import Path
from typing import Dict, Any, Optional


_PLACEHOLDER = re.compile(r"^\$\{([^}:]+)(?::([^}]*))?\}$")


class Config:
    def __init__(self, config_path: Optional[str] = None):
        load_dotenv()
        self.config_path = config_path or self._find_config_file()
        self.config = self._load_config()
        self._resolve_environment_variables()

    def _find_config_file(self) -> str:
        """Find the config file, falling back to the packaged defaults."""
        if os.environ.get("FOLKIT_CONFIG"):
            return os.environ["FOLKIT_CONFIG"]

        possible_paths = [
            Path.cwd() / "configs" / "folkit.yaml",
            Path.home() / ".folkit" / "config.yaml",
            Path(__file__).parent.parent / "configs" / "default.yaml",
        ]

        for path in possible_paths:
            if path.exists():
                return str(path)

        raise FileNotFoundError("No configuration file found")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}

    def _resolve_environment_variables(self):
        """Resolve ${VAR:default} placeholders from the environment."""
        def resolve_value(value):
            if isinstance(value, str):
                placeholder = _PLACEHOLDER.match(value)
                if placeholder:
                    var_name, default_value = placeholder.group(1), placeholder.group(2) or ""
                    # Coerce "true", "10" etc. the same way YAML would
                    return yaml.safe_load(os.environ.get(var_name, default_value) or "null")
                return value
            elif isinstance(value, dict):
                return {k: resolve_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [resolve_value(v) for v in value]
            return value

        self.config = resolve_value(self.config)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return self.get(key)

    def update(self, updates: Dict[str, Any]):
        """Update configuration with new values."""
        def deep_update(d, u):
            for k, v in u.items():
                if isinstance(v, dict):
                    d[k] = deep_update(d.get(k, {}) or {}, v)
                else:
                    d[k] = v
            return d

        self.config = deep_update(self.config, updates)


# Global config instance
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Forget the global configuration so that the next get_config() reloads it."""
    global _config
    _config = None
