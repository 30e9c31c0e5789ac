"""Pydantic configuration models for apiwire clients."""

import logging
import os
import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..logging_config import setup_logging
from .environment import ApiEnvironment

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def _expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. References to unset variables are left
    untouched.
    """
    if value is None:
        return None

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return _ENV_VAR_PATTERN.sub(replace, value)


class AuthConfig(BaseModel):
    """Configuration for bearer-token authentication."""

    header_field: str = Field("Authorization", description="Header carrying the token")
    header_prefix: str = Field("Bearer ", description="Prefix placed before the token value")
    token_key: str = Field("accessToken", description="Credential store key holding the token")
    keyring_service: str = Field("apiwire", description="Keyring service namespace for stored secrets")

    model_config = {"extra": "forbid"}


class NetworkConfig(BaseModel):
    """Configuration for the live HTTP transport and diagnostics."""

    timeout: float = Field(30.0, gt=0, description="Total request timeout in seconds")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    log_responses: bool = Field(
        False,
        description="Log method, URL, status and body of every response at DEBUG level",
    )

    model_config = {"extra": "forbid"}

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables in the proxy URL."""
        if self.proxy:
            object.__setattr__(self, "proxy", _expand_env_var(self.proxy))


class ClientConfig(BaseModel):
    """
    Root configuration for an apiwire client.

    Example:
        config = ClientConfig(
            base_url="https://api.example.com",
            auth=AuthConfig(keyring_service="com.example.app"),
        )

    YAML format:
        base_url: ${API_BASE_URL}
        auth:
          keyring_service: com.example.app
        network:
          timeout: 10
          log_responses: true
    """

    base_url: Optional[str] = Field(None, description="Base URL of the API")
    auth: AuthConfig = Field(default_factory=AuthConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def model_post_init(self, __context: object) -> None:
        """Expand environment variables in the base URL."""
        if self.base_url:
            object.__setattr__(self, "base_url", _expand_env_var(self.base_url))

    def environment(self) -> ApiEnvironment:
        """Build the environment described by this config."""
        return ApiEnvironment(base_url=self.base_url)

    def configure_logging(self, force: bool = False) -> logging.Logger:
        """Apply ``log_level`` and ``log_file`` to the apiwire logger."""
        return setup_logging(
            level=self.log_level,
            log_file=str(self.log_file) if self.log_file else None,
            force=force,
        )

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClientConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClientConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text())
