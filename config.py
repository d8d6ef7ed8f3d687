"""
Configuration management for the LINE webhook receiver.

Loads environment variables from .env file and provides typed, read-only
access to configuration. Built once at startup and injected into the app.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


FAILURE_POLICIES = ("fail_all", "isolate")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class Config:
    """Configuration for the LINE webhook receiver."""

    # LINE channel credentials
    channel_secret: str = field(repr=False)
    channel_access_token: str = field(repr=False)

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 3000

    # Messaging API
    api_base_url: str = "https://api.line.me"

    # Dispatch
    failure_policy: str = "fail_all"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Load configuration from environment variables.

        Raises:
            ConfigurationError: a secret is missing or a value is invalid
        """
        env = os.environ if environ is None else environ

        required = ["CHANNEL_SECRET", "CHANNEL_ACCESS_TOKEN"]
        missing = [key for key in required if not env.get(key)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        raw_port = env.get("PORT", "3000")
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ConfigurationError(f"PORT out of range: {port}")

        failure_policy = env.get("EVENT_FAILURE_POLICY", "fail_all").lower()
        if failure_policy not in FAILURE_POLICIES:
            raise ConfigurationError(
                f"EVENT_FAILURE_POLICY must be one of {', '.join(FAILURE_POLICIES)}, "
                f"got {failure_policy!r}"
            )

        log_level = env.get("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        return cls(
            channel_secret=env["CHANNEL_SECRET"],
            channel_access_token=env["CHANNEL_ACCESS_TOKEN"],
            host=env.get("HOST", "0.0.0.0"),
            port=port,
            api_base_url=env.get("LINE_API_BASE_URL", "https://api.line.me").rstrip("/"),
            failure_policy=failure_policy,
            log_level=log_level,
        )


if __name__ == "__main__":
    # Test configuration loading
    try:
        config = Config.from_env()
    except ConfigurationError as e:
        print(f"✗ {e}")
        print("   Please set them in .env file")
    else:
        print("Configuration loaded:")
        print(f"  Channel Secret: {'✓ Set' if config.channel_secret else '✗ Missing'}")
        print(f"  Channel Access Token: {'✓ Set' if config.channel_access_token else '✗ Missing'}")
        print(f"  Listen: {config.host}:{config.port}")
        print(f"  API Base URL: {config.api_base_url}")
        print(f"  Failure Policy: {config.failure_policy}")
