import logging
import time
from pathlib import Path
from ffpool.domain.exceptions import MissingPathComponent, ToolUnavailableError
from ffpool.domain.models import Job, JobOutcome, JobStatus
from ffpool.domain.events import JobStarted, JobCompleted, JobFailed
from ffpool.infrastructure.event_bus import EventBus
from ffpool.infrastructure.ffmpeg import FFmpegAdapter
from ffpool.pipeline import path_template


class JobExecutor:
    """Turns one input path into one tool invocation.

    Every per-job failure (template, directory, tool) is converted into a
    JobOutcome here; nothing a single file does escapes into the worker loop.
    """

    def __init__(self, event_bus: EventBus, ffmpeg_adapter: FFmpegAdapter):
        self.event_bus = event_bus
        self.ffmpeg_adapter = ffmpeg_adapter
        self.logger = logging.getLogger(__name__)

    def execute(self, job: Job) -> JobOutcome:
        self.event_bus.publish(JobStarted(job=job))
        self.logger.info(f"JOB_START: worker={job.worker_id} path={job.source_path}")
        start_time = time.monotonic()

        try:
            outcome = self._run(job)
        except Exception as e:
            self.logger.exception(f"JOB_ERROR: unexpected failure on {job.source_path}")
            outcome = JobOutcome(
                source_path=job.source_path,
                status=JobStatus.INTERNAL_ERROR,
                error_message=f"{type(e).__name__}: {e}",
            )
        outcome = outcome.model_copy(update={"duration_seconds": time.monotonic() - start_time})

        if outcome.succeeded:
            self.logger.info(f"JOB_DONE: {job.source_path} -> {outcome.output_path} ({outcome.duration_seconds:.2f}s)")
            self.event_bus.publish(JobCompleted(job=job, outcome=outcome))
        else:
            self.logger.error(f"JOB_FAILED: {job.source_path} status={outcome.status.value}: {outcome.error_message}")
            self.event_bus.publish(JobFailed(job=job, outcome=outcome))
        return outcome

    def _run(self, job: Job) -> JobOutcome:
        config = job.config
        try:
            output_path = path_template.expand(config.output_template, job.source_path)
        except MissingPathComponent as e:
            return JobOutcome(
                source_path=job.source_path,
                status=JobStatus.TEMPLATE_ERROR,
                error_message=str(e),
            )

        # Several workers may create the same tree at once; existing dirs are fine
        output_parent = Path(output_path).parent
        try:
            output_parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return JobOutcome(
                source_path=job.source_path,
                status=JobStatus.DIRECTORY_ERROR,
                output_path=output_path,
                error_message=f"Could not create directory structure for file {output_path}: {e}",
            )

        try:
            result = self.ffmpeg_adapter.run(job.source_path, output_path, config.option_tokens)
        except ToolUnavailableError as e:
            return JobOutcome(
                source_path=job.source_path,
                status=JobStatus.TOOL_UNAVAILABLE,
                output_path=output_path,
                error_message=str(e),
            )

        if not result.succeeded:
            return JobOutcome(
                source_path=job.source_path,
                status=JobStatus.TOOL_FAILED,
                output_path=output_path,
                error_message=result.stderr,
                return_code=result.return_code,
            )

        return JobOutcome(
            source_path=job.source_path,
            status=JobStatus.COMPLETED,
            output_path=output_path,
            return_code=result.return_code,
        )
