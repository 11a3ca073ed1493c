class FFpoolError(Exception):
    """Base class for ffpool errors."""


class MissingPathComponent(FFpoolError):
    """Input path lacks a component the output template needs (extension, stem)."""

    def __init__(self, path, component: str):
        self.path = path
        self.component = component
        super().__init__(f"Path '{path}' has no {component}")


class InvalidPatternError(FFpoolError):
    """Input glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class ToolUnavailableError(FFpoolError):
    """External tool could not be launched at all."""

    def __init__(self, tool: str, cause: OSError):
        self.tool = tool
        self.cause = cause
        super().__init__(f"Could not launch '{tool}': {cause}")
