"""Configuration model for the snapshot runner."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, Field, field_validator

BASE_URL_ENV = "BASE_URL"
TOKEN_ENV = "PERCY_TOKEN"
WORKERS_ENV = "PERCY_PARALLEL_WORKERS"
NETWORK_IDLE_TIMEOUT_ENV = "PERCY_NETWORK_IDLE_TIMEOUT"
PAGE_LOAD_TIMEOUT_ENV = "PERCY_PAGE_LOAD_TIMEOUT"


class MissingConfigError(Exception):
    """A required environment value is absent or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is missing (not in .env or CI secrets)")


class RunnerConfig(BaseModel):
    # Target
    base_url: str
    token: str

    # Tunables forwarded to Percy
    parallel_workers: str = "2"
    network_idle_timeout: int = 60000  # ms
    page_load_timeout: int = 90000  # ms

    # External tool
    percy_command: list[str] = Field(default_factory=lambda: ["npx", "percy"])

    @field_validator("base_url", "token")
    @classmethod
    def require_value(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("parallel_workers")
    @classmethod
    def check_workers(cls, v: str) -> str:
        v = v.strip()
        if not v.isdigit() or int(v) < 1:
            raise ValueError(f"worker count must be a positive integer, got '{v}'")
        return v

    @field_validator("network_idle_timeout", "page_load_timeout")
    @classmethod
    def check_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeout must be a positive number of milliseconds")
        return v

    @field_validator("percy_command")
    @classmethod
    def check_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("percy command must not be empty")
        return v

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "RunnerConfig":
        """Build the config from environment variables.

        Raises MissingConfigError when BASE_URL or PERCY_TOKEN is unset or
        blank, and pydantic's ValidationError when a tunable is malformed.
        """
        env = os.environ if environ is None else environ

        values: dict = {}
        for field, name in (("base_url", BASE_URL_ENV), ("token", TOKEN_ENV)):
            raw = env.get(name, "")
            if not raw.strip():
                raise MissingConfigError(name)
            values[field] = raw

        optional = {
            "parallel_workers": WORKERS_ENV,
            "network_idle_timeout": NETWORK_IDLE_TIMEOUT_ENV,
            "page_load_timeout": PAGE_LOAD_TIMEOUT_ENV,
        }
        for field, name in optional.items():
            raw = env.get(name)
            if raw:
                values[field] = raw.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def tool_env(self) -> dict[str, str]:
        """Variables forwarded to the Percy child process."""
        return {
            TOKEN_ENV: self.token,
            WORKERS_ENV: self.parallel_workers,
            NETWORK_IDLE_TIMEOUT_ENV: str(self.network_idle_timeout),
            PAGE_LOAD_TIMEOUT_ENV: str(self.page_load_timeout),
        }
