"""Read-only git queries: repository root, HEAD revision, remote URL.

Every query returns a ``GitQueryResult`` instead of raising. A missing
executable, a directory outside any repository, a non-zero exit or a hung
process all come back as a failed result carrying the reason, so callers
have to handle absence explicitly.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from dataclasses import dataclass

import structlog

log = structlog.get_logger()


@dataclass(frozen=True)
class GitQueryResult:
    """Outcome of one git query: a value on success, a reason on failure."""

    value: str | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def found(cls, value: str) -> GitQueryResult:
        return cls(value=value)

    @classmethod
    def missing(cls, reason: str) -> GitQueryResult:
        return cls(value=None, reason=reason)


class GitInspector:
    """Runs git as a subprocess. One instance is shared across tool calls."""

    def __init__(
        self,
        executable: str = "git",
        remote_name: str = "origin",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._executable = executable
        self._remote_name = remote_name
        self._timeout_seconds = timeout_seconds

    async def find_root(self, start_dir: str) -> GitQueryResult:
        """Locate the top-level directory of the repository containing ``start_dir``."""
        return await self._run(["rev-parse", "--show-toplevel"], cwd=start_dir)

    async def current_revision(self, root: str) -> GitQueryResult:
        """Full commit hash of HEAD. Fails on an empty repository."""
        return await self._run(["rev-parse", "HEAD"], cwd=root)

    async def remote_url(self, root: str) -> GitQueryResult:
        """Raw URL of the configured remote, as git prints it."""
        return await self._run(["remote", "get-url", self._remote_name], cwd=root)

    async def _run(self, args: list[str], cwd: str) -> GitQueryResult:
        """Run a git command and return its stripped stdout."""
        command = " ".join(args)
        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable,
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            # Missing executable or missing/unreadable cwd
            log.debug("git_command_failed", command=command, cwd=cwd, error=str(exc))
            return GitQueryResult.missing(f"could not run {self._executable}: {exc}")

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout_seconds
            )
        except TimeoutError:
            log.warning(
                "git_command_timeout", command=command, cwd=cwd, timeout=self._timeout_seconds
            )
            return GitQueryResult.missing(f"git {command} timed out")
        finally:
            # Also reached on cancellation; never leave the child running
            if proc.returncode is None:
                with suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            reason = stderr.decode("utf-8", errors="replace").strip()
            log.debug(
                "git_command_failed",
                command=command,
                cwd=cwd,
                returncode=proc.returncode,
                stderr=reason,
            )
            return GitQueryResult.missing(reason or f"git {command} exited with {proc.returncode}")

        output = stdout.decode("utf-8", errors="replace").strip()
        if not output:
            return GitQueryResult.missing(f"git {command} produced no output")
        return GitQueryResult.found(output)
