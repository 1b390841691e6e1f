"""
executor.py: runs rendered invocations as child processes
"""
import logging
import subprocess
import sys
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Mapping, Optional, TextIO

from .errors import ProcessError
from .models import Invocation


class ProcessExecutor:
    """
    ProcessExecutor: executes invocations (optionally under sudo).

    Two modes are offered: run-to-completion (`run`, `capture`) raising
    ProcessError on failure, and fire-and-collect (`launch_all`) which runs a
    batch on a bounded thread pool and reports failures instead of raising.
    Child stdout is inherited by `run` and piped by `capture`; child stderr is
    always echoed line by line to `stderr` while the child runs.
    """

    def __init__(self, sudo: bool = True, max_workers: int = 8,
                 stderr: Optional[TextIO] = None,
                 logger: Optional[logging.Logger] = None):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1.")
        self.sudo = sudo
        self.max_workers = max_workers
        self.stderr = stderr
        self.logger = logger or logging.getLogger("kubefire.executor")

    def argv(self, invocation: Invocation) -> List[str]:
        argv = invocation.argv
        if self.sudo:
            argv = ["sudo"] + argv
        return argv

    def _spawn(self, argv: List[str], stdout) -> subprocess.Popen:
        try:
            return subprocess.Popen(argv, stdout=stdout, stderr=subprocess.PIPE)
        except OSError as e:
            raise ProcessError(argv, reason=str(e)) from e

    def _pump_stderr(self, proc: subprocess.Popen, lines: List[str]):
        stream = self.stderr or sys.stderr
        for raw in proc.stderr:
            line = raw.decode(errors="replace")
            lines.append(line)
            stream.write(line)
            stream.flush()

    def run(self, invocation: Invocation) -> None:
        """
        Run to completion. stdout goes straight to the caller's stdout, stderr
        is echoed and kept for the ProcessError.
        """
        argv = self.argv(invocation)
        self.logger.debug("Running: %s", " ".join(argv))
        proc = self._spawn(argv, None)

        lines: List[str] = []
        with proc:
            self._pump_stderr(proc, lines)
        if proc.returncode != 0:
            raise ProcessError(argv, proc.returncode, "".join(lines))

    def capture(self, invocation: Invocation) -> bytes:
        """
        Run to completion and return stdout as bytes
        """
        argv = self.argv(invocation)
        self.logger.debug("Capturing: %s", " ".join(argv))
        proc = self._spawn(argv, subprocess.PIPE)

        lines: List[str] = []
        # stderr is drained on its own thread so neither pipe can fill up
        pump = threading.Thread(target=self._pump_stderr, args=(proc, lines), daemon=True)
        with proc:
            pump.start()
            output = proc.stdout.read()
            pump.join()
        if proc.returncode != 0:
            raise ProcessError(argv, proc.returncode, "".join(lines))
        return output

    def launch_all(self, invocations: Mapping[str, Invocation]) -> Dict[str, ProcessError]:
        """
        Fire-and-collect: run every invocation concurrently, at most
        `max_workers` at a time, and wait for all of them.
        :param invocations: label (e.g. node name) -> invocation
        :return: label -> ProcessError for every failed invocation
        """
        failures: Dict[str, ProcessError] = {}
        if not invocations:
            return failures

        workers = min(self.max_workers, len(invocations))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="kubefire") as pool:
            futures = {pool.submit(self.run, inv): label for label, inv in invocations.items()}
            for future in as_completed(futures):
                label = futures[future]
                try:
                    future.result()
                except ProcessError as e:
                    self.logger.debug("Process for %s failed: %s", label, e)
                    failures[label] = e
                else:
                    self.logger.debug("Process for %s finished", label)
        return failures
