from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, ConfigDict

from ffpool.config.models import AppConfig

class JobStatus(str, Enum):
    COMPLETED = "COMPLETED"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"  # Output path could not be expanded
    DIRECTORY_ERROR = "DIRECTORY_ERROR"  # Output directory could not be created
    TOOL_FAILED = "TOOL_FAILED"  # Tool exited nonzero
    TOOL_UNAVAILABLE = "TOOL_UNAVAILABLE"  # Tool could not be launched
    INTERNAL_ERROR = "INTERNAL_ERROR"  # Unexpected exception while running the job

class PathParts(BaseModel):
    model_config = ConfigDict(frozen=True)

    ext: str
    name: str
    dir: str
    parent: str

class Job(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_path: Path
    worker_id: int
    config: AppConfig

class JobOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_path: Path
    status: JobStatus
    output_path: Optional[str] = None
    error_message: Optional[str] = None
    return_code: Optional[int] = None
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.COMPLETED
