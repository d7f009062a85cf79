"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from src.builder import MODE_COMBINED, MODE_SPLIT, SnapshotJob, SnapshotJobBuilder
from src.models.config import RunnerConfig


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def base_env() -> dict[str, str]:
    """Minimal environment with both required values set."""
    return {
        "BASE_URL": "https://example.com/",
        "PERCY_TOKEN": "abc",
    }


@pytest.fixture
def runner_config(base_env: dict[str, str]) -> RunnerConfig:
    """Create a test runner configuration."""
    return RunnerConfig.from_env(base_env)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no snapshot variables in the environment."""
    for name in (
        "BASE_URL",
        "PERCY_TOKEN",
        "PERCY_PARALLEL_WORKERS",
        "PERCY_NETWORK_IDLE_TIMEOUT",
        "PERCY_PAGE_LOAD_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ============================================================================
# Job Fixtures
# ============================================================================


@pytest.fixture
def combined_job(runner_config: RunnerConfig) -> SnapshotJob:
    """Create a single-document snapshot job."""
    return SnapshotJobBuilder(runner_config, mode=MODE_COMBINED).build()


@pytest.fixture
def split_job(runner_config: RunnerConfig) -> SnapshotJob:
    """Create a snapshot-list plus global-config job."""
    return SnapshotJobBuilder(runner_config, mode=MODE_SPLIT).build()
