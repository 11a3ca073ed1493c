"""Domain events for the transcoding dispatcher.

Events flow through the EventBus from worker threads to whoever subscribed
(the console reporter, tests). Publishing is synchronous, so subscribers run
on the publishing worker's thread.

See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from pathlib import Path
from typing import List
from pydantic import BaseModel, Field
from .models import Job, JobOutcome, JobStatus


class Event(BaseModel):
    """Base class for all domain events."""

    pass


class DiscoveryFinished(Event):
    """Emitted once the input pattern has been expanded."""

    pattern: str
    files_found: int


class WorkerStarted(Event):
    worker_id: int


class WorkerFinished(Event):
    """Emitted when a worker found the queue empty and terminated."""

    worker_id: int
    jobs_processed: int


class JobEvent(Event):
    """Base class for events related to a single job."""

    job: Job


class JobStarted(JobEvent):
    pass


class JobCompleted(JobEvent):
    """Emitted when the tool exited successfully."""

    outcome: JobOutcome


class JobFailed(JobEvent):
    """Emitted for any per-job failure. The batch keeps going."""

    outcome: JobOutcome

    @property
    def status(self) -> JobStatus:
        return self.outcome.status


class ProcessingFinished(Event):
    """Emitted after every worker has terminated (join barrier reached)."""

    total: int
    completed: int
    failed: int
    elapsed_seconds: float
    failed_paths: List[Path] = Field(default_factory=list)
