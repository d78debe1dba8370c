"""
Pydantic configuration models.

Validates AWS and reconciler settings at start-up instead of silently
passing bad values to boto3 or the poll loop.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from certsync.base.polling import PollPolicy

CERTIFICATE_RESOURCE_TYPE = "AWS::CertificateManager::Certificate"
DEFAULT_VALIDATION_SUFFIX = "acm-validations.aws"
DEFAULT_ZONE_TAG_KEY = "HostedZoneId"


class AWSConfig(BaseModel):
    """Configuration for the AWS clients.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_DEFAULT_REGION).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (Lambda execution role, ~/.aws/credentials, etc.).
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "region_name": "AWS_DEFAULT_REGION",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values


class ReconcilerSettings(BaseModel):
    """Tunables for the reconciliation engine.

    Each field falls back to a ``CERTSYNC_<FIELD>`` environment variable
    (e.g. ``CERTSYNC_POLL_INTERVAL``) when not passed explicitly.
    """

    model_config = ConfigDict(extra="forbid")

    poll_interval: float = Field(default=10.0, ge=0, description="Seconds between validation polls")
    poll_max_attempts: int | None = Field(default=None, ge=1, description="Poll attempt ceiling")
    poll_max_duration: float | None = Field(default=None, gt=0, description="Poll time ceiling (s)")
    poll_backoff_factor: float = Field(default=1.0, ge=1.0)
    poll_max_interval: float = Field(default=60.0, ge=0)
    record_ttl: int = Field(default=300, ge=0, description="TTL of created validation records")
    validation_suffix: str = Field(default=DEFAULT_VALIDATION_SUFFIX, min_length=1)
    zone_tag_key: str = Field(default=DEFAULT_ZONE_TAG_KEY, min_length=1)
    deadline_margin: float = Field(
        default=5.0, ge=0, description="Seconds reserved before the invocation deadline"
    )
    log_level: str = Field(default="INFO")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to ``CERTSYNC_*`` environment variables for missing settings."""
        for field in cls.model_fields:
            if values.get(field) is None:
                env_val = os.environ.get(f"CERTSYNC_{field.upper()}")
                if env_val:
                    values[field] = env_val
        return values

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def poll_policy(self) -> PollPolicy:
        """Build the validation-record poll policy from these settings."""
        return PollPolicy(
            interval=self.poll_interval,
            max_attempts=self.poll_max_attempts,
            max_duration=self.poll_max_duration,
            backoff_factor=self.poll_backoff_factor,
            max_interval=self.poll_max_interval,
        )


__all__ = [
    "AWSConfig",
    "ReconcilerSettings",
    "CERTIFICATE_RESOURCE_TYPE",
    "DEFAULT_VALIDATION_SUFFIX",
    "DEFAULT_ZONE_TAG_KEY",
]
