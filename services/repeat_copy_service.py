# services/repeat_copy_service.py
# Timed delete-then-copy cycles of one file, single worker, cooperative cancel

from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor

from copy_io.file_copy import copy_stream, remove_if_exists
from copy_io.path_utils import ensure_dir
from domain.models import CancellationHandle, CopyJob, CopyProgress, RunOutcome
from utils.sizefmt import format_rate
from utils.timeutil import elapsed_ms, monotonic_clock


def _deliver_inline(fn):
    fn()


class RepeatCopyService:
    def __init__(self, run_logger=None, clock=monotonic_clock):
        self.run_logger = run_logger
        self.clock = clock

    def _log(self, msg: str):
        if self.run_logger:
            self.run_logger.log(msg)

    def run(self, job: CopyJob, cancel: CancellationHandle, on_progress=None) -> RunOutcome:
        """Run every cycle of job on the calling thread and return the outcome.

        Cancellation is only checked at the top of a cycle; a copy in
        progress is never interrupted. on_progress gets one CopyProgress per
        completed cycle, in cycle order.
        """
        target = job.target_path
        self._log(f"RUN start source={job.source_path} target={target} times={job.repeat_count}")

        try:
            ensure_dir(job.destination_dir)
            size = os.path.getsize(job.source_path)
        except OSError as e:
            return self._finish(RunOutcome.failed(0, e, "PREPARE"))

        total_ms = 0.0
        for i in range(1, job.repeat_count + 1):
            if cancel.is_cancelled():
                return self._finish(RunOutcome.cancelled(i - 1))

            try:
                remove_if_exists(target)
            except OSError as e:
                return self._finish(RunOutcome.failed(i - 1, e, "DELETE"))

            try:
                start = self.clock()
                copied = copy_stream(job.source_path, target)
                end = self.clock()
            except OSError as e:
                return self._finish(RunOutcome.failed(i - 1, e, "COPY"))

            took = elapsed_ms(start, end)
            total_ms += took
            mean_ms = total_ms / i

            self._log(f"CYCLE {i}/{job.repeat_count} bytes={copied} took={took:.2f}ms mean={mean_ms:.2f}ms")
            if on_progress:
                on_progress(CopyProgress(i, mean_ms, format_rate(size, mean_ms)))

        return self._finish(RunOutcome.completed(job.repeat_count))

    def _finish(self, outcome: RunOutcome) -> RunOutcome:
        if outcome.is_failed:
            self._log(f"RUN {outcome.status} phase={outcome.phase} after {outcome.cycles_completed} cycles: {outcome.reason}")
        else:
            self._log(f"RUN {outcome.status} after {outcome.cycles_completed} cycles")
        return outcome

    def start(
        self,
        job: CopyJob,
        cancel: CancellationHandle,
        on_progress=None,
        on_outcome=None,
        deliver=None,
    ) -> Future:
        """Run job on one background thread without blocking the caller.

        Every callback is handed to deliver(fn), which decides where fn runs
        (e.g. posts it to a UI thread). deliver must keep calls in order.
        The default runs callbacks directly on the worker thread.
        """
        deliver = deliver or _deliver_inline

        reported = {"cycles": 0}

        def progress_cb(p: CopyProgress):
            if on_progress:
                deliver(lambda: on_progress(p))
            reported["cycles"] = p.cycle_index

        def _task() -> RunOutcome:
            try:
                outcome = self.run(job, cancel, progress_cb)
            except Exception as e:
                # observer errors end the run as FAILED
                outcome = self._finish(RunOutcome.failed(reported["cycles"], e, "CALLBACK"))
            if on_outcome:
                deliver(lambda: on_outcome(outcome))
            return outcome

        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="repeat-copy")
        try:
            return pool.submit(_task)
        finally:
            # Worker keeps running; the pool just accepts no more work.
            pool.shutdown(wait=False)
