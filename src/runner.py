"""Runs Percy against a built snapshot job and cleans up its files."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Optional

from src.builder import MODE_COMBINED, SnapshotJob
from src.models.config import RunnerConfig

logger = logging.getLogger(__name__)


class SnapshotToolError(Exception):
    """Snapshot files could not be written, or Percy could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class SnapshotRunner:
    """Writes the job's YAML files, invokes ``percy snapshot`` and removes the files."""

    def __init__(self, config: RunnerConfig, workdir: Path | None = None):
        self.config = config
        self.workdir = Path(workdir) if workdir is not None else Path(".")

    def build_command(self, job: SnapshotJob) -> list[str]:
        """Argument list for the child process (never passed through a shell)."""
        cmd = [*self.config.percy_command, "snapshot", str(self.workdir / job.snapshot_file)]
        if job.config_file:
            cmd += ["--config", str(self.workdir / job.config_file)]
        if job.mode == MODE_COMBINED:
            cmd.append(f"--network-idle-timeout={self.config.network_idle_timeout}")
        return cmd

    def build_env(self, base_env: Mapping[str, str] | None = None) -> dict[str, str]:
        """Current environment with the token and tunables layered on top."""
        env = dict(os.environ if base_env is None else base_env)
        env.update(self.config.tool_env())
        return env

    def run(
        self,
        job: SnapshotJob,
        on_written: Callable[[list[Path]], None] | None = None,
    ) -> None:
        """Write, invoke, and always clean up. Raises SnapshotToolError on failure.

        ``on_written`` is called with the file paths once every document is on disk.
        """
        written: list[Path] = []
        try:
            for name, text in job.render().items():
                path = self.workdir / name
                # Tracked before writing so a partial file is still removed.
                written.append(path)
                try:
                    path.write_text(text, encoding="utf-8")
                except OSError as e:
                    raise SnapshotToolError(f"Could not write {path}: {e}") from e
                logger.debug("Wrote %s (%d bytes)", path, len(text))
            if on_written is not None:
                on_written(written)

            cmd = self.build_command(job)
            logger.debug("Running: %s", " ".join(cmd))
            self._invoke(cmd, self.build_env())
        finally:
            self.cleanup(written)

    def _invoke(self, cmd: list[str], env: dict[str, str]) -> None:
        try:
            result = subprocess.run(cmd, env=env, check=False)
        except OSError as e:
            raise SnapshotToolError(f"Could not start {cmd[0]}: {e}") from e
        if result.returncode != 0:
            raise SnapshotToolError(
                f"percy exited with status {result.returncode}",
                returncode=result.returncode,
            )
        logger.debug("percy exited cleanly")

    def cleanup(self, paths: list[Path]) -> None:
        """Best-effort removal; a missing file is not an error."""
        for path in paths:
            try:
                path.unlink(missing_ok=True)
                logger.debug("Removed %s", path)
            except OSError as e:
                logger.warning("Could not remove %s: %s", path, e)
