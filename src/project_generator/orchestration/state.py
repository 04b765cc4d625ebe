"""State management for the project generation workflow."""

from pathlib import Path
from typing import Optional

from typing_extensions import TypedDict

from project_generator.components.types import FileMap, GenerationOutcome, GenerationRequest, GenerationStage, ProjectTarget
from project_generator.errors import GenerationError


class GenerationState(TypedDict):
    """State for a single generation request.

    Attributes:
        request: Project type and description submitted by the user
        workspace: Directory the project is created in
        stage: Current workflow stage
        target: Resolved project directory
        raw_response: Text returned by the model
        files: File map to write, parsed or fallback
        fallback_used: Whether the fallback template replaced the model output
        written: Relative paths written so far
        error: Error that ended the workflow
        outcome: Terminal outcome, set by the report step
    """

    request: GenerationRequest
    workspace: Path
    stage: GenerationStage
    target: Optional[ProjectTarget]
    raw_response: Optional[str]
    files: Optional[FileMap]
    fallback_used: bool
    written: list[str]
    error: Optional[GenerationError]
    outcome: Optional[GenerationOutcome]


def create_initial_state(request: GenerationRequest, workspace: Path) -> GenerationState:
    """Create initial workflow state."""
    return {
        "request": request,
        "workspace": workspace,
        "stage": GenerationStage.IDLE,
        "target": None,
        "raw_response": None,
        "files": None,
        "fallback_used": False,
        "written": [],
        "error": None,
        "outcome": None,
    }
