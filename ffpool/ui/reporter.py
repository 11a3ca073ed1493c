import threading
from typing import Optional
from rich.console import Console
from rich.markup import escape

from ffpool.infrastructure.event_bus import EventBus
from ffpool.domain.events import (
    DiscoveryFinished, JobStarted, JobCompleted, JobFailed, ProcessingFinished
)
from ffpool.domain.models import JobStatus


class ConsoleReporter:
    """Subscribes to EventBus and prints one status line per event.

    Events arrive on worker threads; a lock keeps each message block together
    so lines from different workers interleave but never split.
    """

    def __init__(self, bus: EventBus, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.bus = bus
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.err_console = err_console or Console(stderr=True, highlight=False, soft_wrap=True)
        self._lock = threading.Lock()
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        self.bus.subscribe(DiscoveryFinished, self.on_discovery_finished)
        self.bus.subscribe(JobStarted, self.on_job_started)
        self.bus.subscribe(JobCompleted, self.on_job_completed)
        self.bus.subscribe(JobFailed, self.on_job_failed)
        self.bus.subscribe(ProcessingFinished, self.on_processing_finished)

    @staticmethod
    def _prefix(worker_id: int) -> str:
        return escape(f"[THREAD {worker_id}]") + " --"

    def on_discovery_finished(self, event: DiscoveryFinished):
        with self._lock:
            if event.files_found == 0:
                self.console.print(f"[yellow]No files matched {escape(event.pattern)}[/yellow]")
            else:
                self.console.print(f"Found {event.files_found} file(s) matching {escape(event.pattern)}")

    def on_job_started(self, event: JobStarted):
        with self._lock:
            self.console.print(f"{self._prefix(event.job.worker_id)} Processing {escape(str(event.job.source_path))}")

    def on_job_completed(self, event: JobCompleted):
        with self._lock:
            self.console.print(
                f"{self._prefix(event.job.worker_id)} [green]Success[/green], "
                f"saving to {escape(event.outcome.output_path or '')}"
            )

    def on_job_failed(self, event: JobFailed):
        prefix = self._prefix(event.job.worker_id)
        outcome = event.outcome
        with self._lock:
            if outcome.status == JobStatus.TOOL_UNAVAILABLE:
                self.err_console.print(
                    f"{prefix} [red]There was an error running {escape(event.job.config.tool)}.[/red] "
                    f"Please check if it's correctly installed and working as intended."
                )
            elif outcome.status == JobStatus.TOOL_FAILED:
                self.err_console.print(f"{prefix} [red]Error![/red]")
                self.err_console.print(f"{prefix} Error is: {escape(outcome.error_message or '')}")
                self.err_console.print(f"{prefix} Continuing with next task if there's more to do...")
            else:
                self.err_console.print(
                    f"{prefix} [red]Skipping {escape(str(event.job.source_path))}:[/red] "
                    f"{escape(outcome.error_message or '')}"
                )

    def on_processing_finished(self, event: ProcessingFinished):
        with self._lock:
            style = "green" if event.failed == 0 else "yellow"
            self.console.print(
                f"[{style}]Done: {event.completed}/{event.total} succeeded, "
                f"{event.failed} failed ({event.elapsed_seconds:.1f}s)[/{style}]"
            )
            for path in event.failed_paths:
                self.console.print(f"  failed: {escape(str(path))}")
