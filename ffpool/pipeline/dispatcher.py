"""Fan-out of discovered paths over a fixed number of worker threads.

All workers share one WorkQueue and pull from it until it is empty. The
worker pool is a ThreadPoolExecutor used as a context manager, so leaving the
`with` block is the join barrier: `run` cannot return before every worker has
terminated. Ctrl+C stops workers from taking further paths; the
tool runs already in flight receive the same SIGINT from the terminal.

Workers collect their own outcomes locally and hand them back through their
futures; the WorkQueue stays the only state shared between threads.
"""

import concurrent.futures
import logging
import threading
import time
from pathlib import Path
from typing import Iterable, List
from pydantic import BaseModel, Field

from ffpool.config.models import AppConfig
from ffpool.domain.models import Job, JobOutcome
from ffpool.domain.events import WorkerStarted, WorkerFinished, ProcessingFinished
from ffpool.infrastructure.event_bus import EventBus
from ffpool.pipeline.job_executor import JobExecutor
from ffpool.pipeline.work_queue import WorkQueue


class RunSummary(BaseModel):
    total: int
    outcomes: List[JobOutcome] = Field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def completed(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.completed

    @property
    def processed_paths(self) -> List[Path]:
        return [o.source_path for o in self.outcomes]

    @property
    def failed_paths(self) -> List[Path]:
        return [o.source_path for o in self.outcomes if not o.succeeded]


class Dispatcher:
    """Runs config.threads workers over one shared WorkQueue.

    Args:
        config: Immutable run configuration (thread count, options, template).
        event_bus: EventBus for worker and job lifecycle events.
        job_executor: Executes a single Job and returns its outcome.
    """

    def __init__(self, config: AppConfig, event_bus: EventBus, job_executor: JobExecutor):
        if config.threads < 1:
            raise ValueError(f"threads must be positive, got {config.threads}")
        self.config = config
        self.event_bus = event_bus
        self.job_executor = job_executor
        self.logger = logging.getLogger(__name__)
        self._stop_event = threading.Event()

    def request_stop(self):
        """Workers finish their current job and take no further paths."""
        self._stop_event.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def _worker_loop(self, worker_id: int, queue: WorkQueue) -> List[JobOutcome]:
        self.event_bus.publish(WorkerStarted(worker_id=worker_id))
        outcomes: List[JobOutcome] = []
        while not self._stop_event.is_set():
            path = queue.take()
            if path is None:
                break
            job = Job(source_path=path, worker_id=worker_id, config=self.config)
            outcomes.append(self.job_executor.execute(job))
        self.logger.debug(f"WORKER_END: worker={worker_id} jobs={len(outcomes)}")
        self.event_bus.publish(WorkerFinished(worker_id=worker_id, jobs_processed=len(outcomes)))
        return outcomes

    def run(self, paths: Iterable[Path]) -> RunSummary:
        """Processes every path exactly once and returns after all workers exit."""
        queue = WorkQueue(paths)
        threads = self.config.threads
        self.logger.info(f"Dispatch: files={queue.initial_count} threads={threads}")
        start_time = time.monotonic()

        try:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=threads, thread_name_prefix="ffpool-worker"
            ) as executor:
                futures = [
                    executor.submit(self._worker_loop, worker_id, queue)
                    for worker_id in range(threads)
                ]
        except KeyboardInterrupt:
            # Ctrl+C lands on the main thread while it waits at the barrier
            self.logger.info(f"Interrupted: {queue.remaining} file(s) left unprocessed")
            self.request_stop()
            raise

        outcomes: List[JobOutcome] = []
        for future in futures:
            # Re-raises programming errors from a worker; job failures never get here
            outcomes.extend(future.result())

        summary = RunSummary(
            total=queue.initial_count,
            outcomes=outcomes,
            elapsed_seconds=time.monotonic() - start_time,
        )
        self.logger.info(
            f"Dispatch finished: completed={summary.completed} failed={summary.failed} "
            f"elapsed={summary.elapsed_seconds:.2f}s"
        )
        self.event_bus.publish(ProcessingFinished(
            total=summary.total,
            completed=summary.completed,
            failed=summary.failed,
            elapsed_seconds=summary.elapsed_seconds,
            failed_paths=summary.failed_paths,
        ))
        return summary
