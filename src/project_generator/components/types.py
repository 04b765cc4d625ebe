from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Relative file path -> file content
FileMap = dict[str, str]


class ProjectType(str, Enum):
    """Project kinds offered to the user."""

    WEBSITE = "Website"
    API = "API"
    GPT_AGENT = "GPT Agent"
    MOBILE_APP = "Mobile App"
    CHROME_EXTENSION = "Chrome Extension"
    CLI_TOOL = "CLI Tool"

    @property
    def summary(self) -> str:
        return _PROJECT_TYPE_SUMMARIES[self]


_PROJECT_TYPE_SUMMARIES = {
    ProjectType.WEBSITE: "Full-stack web application",
    ProjectType.API: "REST or GraphQL backend",
    ProjectType.GPT_AGENT: "AI-powered application",
    ProjectType.MOBILE_APP: "React Native application",
    ProjectType.CHROME_EXTENSION: "Browser extension",
    ProjectType.CLI_TOOL: "Command-line application",
}


class CollisionPolicy(str, Enum):
    """What to do when the derived project directory already exists."""

    FAIL = "fail"
    SUFFIX = "suffix"
    OVERWRITE = "overwrite"


class FollowUpAction(str, Enum):
    """Action offered after a project has been written."""

    NONE = "none"
    OPEN = "open"
    INSTALL = "install"


class GenerationStage(str, Enum):
    """Stages of a single generation request."""

    IDLE = "idle"
    NAME_DERIVED = "name_derived"
    MODEL_REQUESTED = "model_requested"
    PARSED_OK = "parsed_ok"
    FALLBACK_USED = "fallback_used"
    FILES_WRITTEN = "files_written"
    REPORTED = "reported"
    FAILED = "failed"


class OutcomeStatus(str, Enum):
    """Terminal status reported to the user."""

    SUCCEEDED = "succeeded"
    FALLBACK_USED = "fallback_used"
    FAILED = "failed"


class GenerationRequest(BaseModel):
    """A single project generation request."""

    model_config = ConfigDict(frozen=True)

    project_type: str = Field(..., description="Kind of project to generate (e.g., Website, API)")
    description: str = Field(..., description="Natural-language description of the project")

    @field_validator("project_type")
    @classmethod
    def _require_project_type(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please select a project type")
        return value

    @field_validator("description")
    @classmethod
    def _require_description(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Please describe your project")
        return value


class ProjectTarget(BaseModel):
    """Where a project will be written."""

    model_config = ConfigDict(frozen=True)

    root_directory: Path = Field(..., description="Absolute workspace directory")
    project_name: str = Field(..., pattern=r"^[a-z0-9-]+$", description="Sanitized project directory name")

    @property
    def path(self) -> Path:
        return self.root_directory / self.project_name


class GenerationOutcome(BaseModel):
    """Terminal result of a generation request."""

    status: OutcomeStatus
    project_name: Optional[str] = None
    project_path: Optional[Path] = None
    files: list[str] = Field(default_factory=list, description="Relative paths written, in write order")
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def fallback_used(self) -> bool:
        return self.status == OutcomeStatus.FALLBACK_USED

    @property
    def failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED
