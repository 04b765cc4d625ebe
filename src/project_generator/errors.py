"""Errors raised while generating a project."""

from pathlib import Path
from typing import Optional


class GenerationError(Exception):
    """Base class for failures that end a generation request."""

    pass


class ConfigurationError(GenerationError):
    """Raised when the workspace, model config or API credential is missing."""

    pass


class ModelRequestError(GenerationError):
    """Raised when the model API call fails (network, auth, rate limit)."""

    pass


class ParseError(GenerationError):
    """Raised inside the response parser when a model response is malformed."""

    pass


class NameCollisionError(GenerationError):
    """Raised when the derived project directory already exists."""

    def __init__(self, path: Path):
        super().__init__(f"Project directory already exists: {path}")
        self.path = path


class ProjectBusyError(GenerationError):
    """Raised when another request is already generating into the same directory."""

    def __init__(self, path: Path):
        super().__init__(f"A generation into {path} is already in progress")
        self.path = path


class ProjectIOError(GenerationError):
    """Base class for filesystem and timeout failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class PathEscapeError(ProjectIOError):
    """Raised when a generated file path would resolve outside the project root."""

    def __init__(self, path: str):
        super().__init__(f"Refusing to write outside the project root: {path!r}", path=path)


class FileWriteError(ProjectIOError):
    """Raised when a generated file cannot be written."""

    pass


class RequestTimeoutError(ProjectIOError):
    """Raised when the model does not answer within the request timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"Model request timed out after {timeout:g}s")
        self.timeout = timeout
