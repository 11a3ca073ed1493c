from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class AppConfig(BaseModel):
    """Run configuration shared read-only by every worker."""
    model_config = ConfigDict(frozen=True)

    threads: int = Field(default=2, gt=0)
    ffmpeg_options: str = ""
    input_pattern: str
    output_template: str
    tool: str = "ffmpeg"
    input_flag: str = "-i"
    fail_on_error: bool = False  # Exit nonzero when any job failed
    debug: bool = False
    log_path: Optional[str] = None

    @field_validator("input_pattern", "output_template", "tool")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def option_tokens(self) -> List[str]:
        """User options split on single spaces. No quoting support."""
        if self.ffmpeg_options == "":
            return []
        return self.ffmpeg_options.split(" ")
