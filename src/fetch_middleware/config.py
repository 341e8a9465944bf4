"""Configuration module for the fetch middleware.

This module provides the FetchMiddlewareConfig class for configuring how
request actions are turned into HTTP requests: the base URL prepended to
relative paths, the default Accept header and the timeout of the default
transport.

Example:
    Basic usage with defaults:

        >>> config = FetchMiddlewareConfig()
        >>> config.base_url
        ''

    Custom configuration:

        >>> config = FetchMiddlewareConfig(
        ...     base_url="https://api.example.com",
        ...     timeout_seconds=10,
        ... )

    Loading from environment:

        >>> import os
        >>> os.environ['FETCH_MIDDLEWARE_BASE_URL'] = 'https://api.example.com'
        >>> config = FetchMiddlewareConfig.from_env()
"""

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator


class FetchMiddlewareConfig(BaseModel):
    """Configuration for the fetch middleware.

    Attributes:
        base_url: Prefix for request URLs that are not absolute
            (``http://`` or ``https://``). Default is "" (no prefix).
        accept: Value of the default Accept header. Caller headers in
            ``meta.config`` may still override it. Default is
            "application/json".
        timeout_seconds: Timeout applied by the default httpx transport.
            Must be greater than 0 and at most 300. Default is 30.

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    base_url: str = Field(
        default="",
        description="Prefix for relative request URLs",
    )
    accept: str = Field(
        default="application/json",
        description="Default Accept header value",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout in seconds for the default httpx transport (0-300]",
    )

    model_config = {"frozen": True}

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip surrounding whitespace from the base URL.

        Example:
            >>> FetchMiddlewareConfig(base_url="  https://api.example.com ").base_url
            'https://api.example.com'
        """
        return v.strip()

    @field_validator("accept")
    @classmethod
    def validate_accept(cls, v: str) -> str:
        """Reject an empty Accept header value.

        Raises:
            ValueError: If the value is blank.
        """
        if not v.strip():
            raise ValueError("accept must not be empty")
        return v.strip()

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, v: float) -> float:
        """Validate the timeout is within acceptable range.

        Raises:
            ValueError: If timeout is not in (0, 300].
        """
        if not (0 < v <= 300):
            raise ValueError(f"timeout_seconds must be greater than 0 and at most 300, got {v}")
        return v

    @classmethod
    def from_env(cls, prefix: str = "FETCH_MIDDLEWARE_") -> "FetchMiddlewareConfig":
        """Create configuration from environment variables.

        Variable names are the uppercase field names with the prefix, e.g.
        ``FETCH_MIDDLEWARE_BASE_URL``. Missing variables use the defaults.

        Args:
            prefix: Prefix for environment variable names.

        Returns:
            FetchMiddlewareConfig populated from environment variables.
        """
        config_dict: dict[str, Any] = {}

        field_types = {
            "base_url": str,
            "accept": str,
            "timeout_seconds": float,
        }

        for field_name, field_type in field_types.items():
            env_value = os.environ.get(f"{prefix}{field_name.upper()}")
            if env_value is None:
                continue
            if field_type is float:
                config_dict[field_name] = float(env_value)
            else:
                config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "FetchMiddlewareConfig":
        """Create configuration from a dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)
