"""
Configuration management for UICraft.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

from uicraft.models import Theme, stack_values


GLOBAL_CONFIG_DIR = Path.home() / ".uicraft"
GLOBAL_CONFIG_FILE = GLOBAL_CONFIG_DIR / "config.yaml"

DEFAULT_MODEL = "gemini-2.5-flash"
FAILURE_POLICIES = ("placeholder", "preserve")


def _parse_timeout(value):
    """Coerce a configured timeout to seconds. Values that are not numbers
    are kept as-is so validate() can report them."""
    if isinstance(value, bool):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


@dataclass
class APIKeys:
    """API key configuration."""

    google: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "APIKeys":
        return cls(google=data.get("google", ""))

    @classmethod
    def from_env(cls) -> "APIKeys":
        """Load API keys from environment variables."""
        return cls(
            google=os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", ""),
        )

    def merge_env(self) -> "APIKeys":
        """Merge with environment variables (env takes precedence)."""
        env_keys = APIKeys.from_env()
        return APIKeys(google=env_keys.google or self.google)


@dataclass
class Defaults:
    """Default settings."""

    model: str = DEFAULT_MODEL
    stack: str = "html"
    theme: str = "light"  # "light" or "dark"
    timeout: float = 120.0  # seconds per completion request
    on_failure: str = "placeholder"  # "placeholder" or "preserve"

    @classmethod
    def from_dict(cls, data: dict) -> "Defaults":
        return cls(
            model=data.get("model", DEFAULT_MODEL),
            stack=data.get("stack", "html"),
            theme=data.get("theme", "light"),
            timeout=_parse_timeout(data.get("timeout", 120.0)),
            on_failure=data.get("on_failure", "placeholder"),
        )

    def merge_env(self) -> "Defaults":
        """Let UICRAFT_MODEL override the configured model."""
        model = os.getenv("UICRAFT_MODEL", "")
        if not model:
            return self
        return Defaults(
            model=model,
            stack=self.stack,
            theme=self.theme,
            timeout=self.timeout,
            on_failure=self.on_failure,
        )


@dataclass
class Config:
    """Complete configuration."""

    api_keys: APIKeys = field(default_factory=APIKeys)
    defaults: Defaults = field(default_factory=Defaults)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from file and environment."""
        config_path = config_path or GLOBAL_CONFIG_FILE

        config = cls()

        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
                config.api_keys = APIKeys.from_dict(data.get("api_keys", {}))
                config.defaults = Defaults.from_dict(data.get("defaults", {}))

        # Environment variables take precedence over the file
        config.api_keys = config.api_keys.merge_env()
        config.defaults = config.defaults.merge_env()

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        config_path = config_path or GLOBAL_CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "api_keys": {
                "google": self.api_keys.google,
            },
            "defaults": {
                "model": self.defaults.model,
                "stack": self.defaults.stack,
                "theme": self.defaults.theme,
                "timeout": self.defaults.timeout,
                "on_failure": self.defaults.on_failure,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        issues = []

        if not self.api_keys.google:
            issues.append("Gemini API key not configured (GEMINI_API_KEY or GOOGLE_API_KEY)")

        if self.defaults.stack not in stack_values():
            issues.append(f"Unknown default stack: {self.defaults.stack}")

        if self.defaults.theme not in [t.value for t in Theme]:
            issues.append(f"Unknown theme: {self.defaults.theme}")

        if self.defaults.on_failure not in FAILURE_POLICIES:
            issues.append(
                f"Unknown on_failure policy: {self.defaults.on_failure} "
                f"(expected one of: {', '.join(FAILURE_POLICIES)})"
            )

        timeout = self.defaults.timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            issues.append(f"Request timeout must be a number of seconds: {timeout!r}")
        elif timeout <= 0:
            issues.append("Request timeout must be positive")

        return issues
