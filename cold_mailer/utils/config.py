"""
Configuration management for Cold Mailer.
"""

from pathlib import Path
from typing import Optional
import copy
import json
import os

from dotenv import load_dotenv


class Config:
    """Manages application configuration and API keys."""

    DEFAULT_CONFIG = {
        "api_keys": {
            "anthropic": "",
        },
        "llm": {
            "model": "claude-sonnet-4-20250514",
            "max_tokens": 1500,
            "temperature": 0.0,
            "timeout": 60,
            "max_input_chars": 20000,
        },
        "fetch": {
            "timeout": 30,
            "user_agent": "",
        },
        "portfolio": {
            "path": "",
            "default_links": [
                "https://github.com/balmukund/react-portfolio",
                "https://github.com/balmukund/nodejs-project",
            ],
        },
        "matching": {
            "max_links": 2,
            "fallback_skills": ["JavaScript", "TypeScript", "React", "Node.js"],
        },
        "sender": {
            "name": "Balmukund Jha",
            "summary": (
                "You are in the final year of an MCA programme with diverse skills and experience. "
                "Your primary expertise is full-stack development (JavaScript, TypeScript, React, "
                "Next.js, Node.js, MongoDB, PostgreSQL), and you have transferable skills that "
                "apply to many other roles."
            ),
        },
        "auth": {
            "jwt_secret": "",
            "jwt_algorithm": "HS256",
            "cookie_name": "token",
        },
        "server": {
            "host": "0.0.0.0",
            "port": 3000,
            "debug": False,
            "cors_origins": ["http://localhost:3000", "http://localhost:5173"],
        },
        "logging": {
            "level": "INFO",
        },
    }

    # Environment variables that override config values
    ENV_OVERRIDES = {
        "JWT_SECRET": "auth.jwt_secret",
        "PORT": "server.port",
        "COLD_MAILER_PORTFOLIO_PATH": "portfolio.path",
        "COLD_MAILER_MODEL": "llm.model",
        "COLD_MAILER_LOG_LEVEL": "logging.level",
    }

    def __init__(self, config_path: Optional[str] = None, env_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file (default: ~/.cold_mailer/config.json)
            env_file: Optional .env file to load (default: .env in the working directory)
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / ".cold_mailer" / "config.json"

        load_dotenv(env_file)
        self.config = self._load_config()

    def _load_config(self) -> dict:
        """Load configuration from file or create default."""
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path.exists():
            with open(self.config_path, 'r') as f:
                user_config = json.load(f)

            config = self._deep_merge(config, user_config)

        return self._apply_env_overrides(config)

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        for env_var, key in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if not value:
                continue

            section, name = key.split('.')
            default = self.DEFAULT_CONFIG[section][name]
            if isinstance(default, int) and not isinstance(default, bool):
                try:
                    value = int(value)
                except ValueError:
                    continue

            config.setdefault(section, {})[name] = value

        return config

    def save(self) -> None:
        """Save current configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default=None):
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "llm.model")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "sender.name")
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_api_key(self, provider: str) -> str:
        """
        Get API key for a provider.

        Checks both config file and environment variables.
        Environment variables take precedence.

        Args:
            provider: Provider name (anthropic)

        Returns:
            API key string
        """
        env_var = f"{provider.upper()}_API_KEY"
        env_value = os.environ.get(env_var)

        if env_value:
            return env_value

        return self.get(f"api_keys.{provider}", "")

    def set_api_key(self, provider: str, key: str) -> None:
        """Set API key for a provider."""
        self.set(f"api_keys.{provider}", key)
        self.save()

    def get_portfolio_path(self) -> Optional[str]:
        """Portfolio dataset path, or None for the bundled dataset."""
        return self.get("portfolio.path") or None

    def get_jwt_secret(self) -> str:
        return self.get("auth.jwt_secret", "")

    def print_config(self) -> None:
        """Print current configuration (with secrets masked)."""
        masked_config = self._mask_sensitive(self.config)
        print(json.dumps(masked_config, indent=2))

    def _mask_sensitive(self, data: dict, sensitive_keys: set = None) -> dict:
        """Mask sensitive values in configuration."""
        if sensitive_keys is None:
            sensitive_keys = {"api_key", "api_keys", "key", "secret", "password"}

        result = {}
        for key, value in data.items():
            if isinstance(value, dict):
                parent_sensitive = any(s in key.lower() for s in sensitive_keys)
                result[key] = self._mask_sensitive(
                    value,
                    {""} if parent_sensitive else sensitive_keys,
                )
            elif any(s in key.lower() for s in sensitive_keys):
                if value:
                    value = str(value)
                    result[key] = f"{value[:4]}...{value[-4:]}" if len(value) > 8 else "****"
                else:
                    result[key] = "(not set)"
            else:
                result[key] = value
        return result

    @classmethod
    def create_default_config(cls, path: str = None) -> 'Config':
        """Create a new config file with default values."""
        config = cls(path)
        config.save()
        return config
