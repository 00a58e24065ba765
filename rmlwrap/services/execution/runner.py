"""
Process runner for the mapping engine.

Spawns the engine, captures both output streams in full, and blocks until
the child exits. This is the only place rmlwrap waits on anything.
"""

import subprocess
import threading
import time
from typing import IO

from ...core.di import resolve_or_default
from ...core.exceptions import ProcessSpawnError, ProcessTimeoutError
from ...core.interfaces.logger import ILogger
from ...core.models.execution import CommandSpec, ProcessOutcome

STDOUT = "stdout"
STDERR = "stderr"


class _StreamCapture:
    """Collects chunks from both pipes in the order they arrive."""

    def __init__(self) -> None:
        self._chunks: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def drain(self, stream: IO[str], name: str) -> None:
        for line in iter(stream.readline, ""):
            with self._lock:
                self._chunks.append((name, line))
        stream.close()

    def text(self, name: str | None = None) -> str:
        with self._lock:
            return "".join(chunk for source, chunk in self._chunks if name in (None, source))


class ProcessRunner:
    """
    Runs a CommandSpec to completion.

    A non-zero exit code is returned as data; deciding whether it means a
    mapping failure is the caller's job.
    """

    # Seconds to wait for reader threads after the child is gone
    READER_JOIN_TIMEOUT = 5.0

    def __init__(self, logger: ILogger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def run(self, spec: CommandSpec, timeout: float | None = None) -> ProcessOutcome:
        """
        Execute the command and wait for it.

        Args:
            spec: Command to run
            timeout: Seconds before the child is killed (None waits forever)

        Returns:
            ProcessOutcome with exit code, both streams and the merged log

        Raises:
            ProcessSpawnError: If the executable cannot be started
            ProcessTimeoutError: If the timeout elapsed; the child was killed
        """
        self.logger.debug("Engine command: %s (cwd=%s)", spec, spec.cwd)
        capture = _StreamCapture()
        start_time = time.monotonic()

        try:
            proc = subprocess.Popen(
                spec.argv,
                cwd=spec.cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            self.logger.error("Could not start engine %s: %s", spec.executable, e)
            raise ProcessSpawnError(
                f"Could not start engine process: {e.strerror or e}",
                command=str(spec),
                cause=e,
            ) from e

        self.logger.debug("Process started: pid=%d", proc.pid)
        readers = [
            threading.Thread(
                target=capture.drain,
                args=(stream, name),
                name=f"rmlwrap-{name}-{proc.pid}",
                daemon=True,
            )
            for stream, name in ((proc.stdout, STDOUT), (proc.stderr, STDERR))
        ]
        for reader in readers:
            reader.start()

        try:
            exit_code = proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            self.logger.warning("Engine exceeded timeout of %ss, killing pid %d", timeout, proc.pid)
            self._terminate(proc, readers)
            raise ProcessTimeoutError(
                "Engine process timed out",
                timeout=timeout,
                command=str(spec),
                log=capture.text(),
                cause=e,
            ) from e
        except BaseException:
            # KeyboardInterrupt or similar: do not leave the JVM running
            self.logger.debug("Interrupted while waiting, killing pid %d", proc.pid)
            self._terminate(proc, readers)
            raise

        self._join(readers)
        duration = time.monotonic() - start_time
        self.logger.debug("Process exited: code=%d, duration=%.2fs", exit_code, duration)

        return ProcessOutcome(
            exit_code=exit_code,
            stdout=capture.text(STDOUT),
            stderr=capture.text(STDERR),
            log=capture.text(),
            duration=duration,
        )

    def _terminate(self, proc: subprocess.Popen, readers: list[threading.Thread]) -> None:
        proc.kill()
        proc.wait()
        self._join(readers)

    def _join(self, readers: list[threading.Thread]) -> None:
        for reader in readers:
            reader.join(self.READER_JOIN_TIMEOUT)
            if reader.is_alive():
                # A grandchild can hold the pipe open after the engine exits
                self.logger.warning(
                    "Reader %s still running after %.1fs, captured output may be incomplete",
                    reader.name,
                    self.READER_JOIN_TIMEOUT,
                )
