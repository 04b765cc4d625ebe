"""Node functions for the generation workflow."""

import asyncio
import logging
from typing import Any

from project_generator.components.types import GenerationOutcome, GenerationStage, OutcomeStatus
from project_generator.errors import GenerationError, ProjectBusyError
from project_generator.fallback import build_fallback
from project_generator.materializer import materialize
from project_generator.naming import resolve_project_target
from project_generator.response_parser import parse_response

from .state import GenerationState

logger = logging.getLogger(__name__)


def _fail(state: GenerationState, error: GenerationError) -> GenerationState:
    logger.error("Generation failed at %s: %s", state["stage"].value, error)
    state["stage"] = GenerationStage.FAILED
    state["error"] = error
    return state


async def derive_name_node(state: GenerationState, agents: dict[str, Any]) -> GenerationState:
    """Resolves the project directory and claims it for this request."""
    try:
        target = resolve_project_target(state["workspace"], state["request"].description, agents["collision_policy"])

        in_flight = agents["in_flight"]
        if target.path in in_flight:
            raise ProjectBusyError(target.path)
        in_flight.add(target.path)
        agents["claims"].append(target.path)

        state["target"] = target
        state["stage"] = GenerationStage.NAME_DERIVED
    except GenerationError as e:
        return _fail(state, e)
    return state


async def request_model_node(state: GenerationState, agents: dict[str, Any]) -> GenerationState:
    """Sends the prompt to the model."""
    try:
        state["raw_response"] = await agents["client"].generate(state["request"])
        state["stage"] = GenerationStage.MODEL_REQUESTED
    except GenerationError as e:
        return _fail(state, e)
    return state


async def parse_response_node(state: GenerationState, agents: dict[str, Any]) -> GenerationState:
    """Parses the model answer, substituting the fallback template when it is malformed."""
    result = parse_response(state["raw_response"] or "")
    if result.ok:
        state["files"] = result.files
        state["stage"] = GenerationStage.PARSED_OK
        return state

    logger.warning("Could not parse AI response (%s), creating basic structure", result.reason)
    request = state["request"]
    state["files"] = build_fallback(request.project_type, request.description)
    state["fallback_used"] = True
    state["stage"] = GenerationStage.FALLBACK_USED
    return state


async def write_files_node(state: GenerationState, agents: dict[str, Any]) -> GenerationState:
    """Writes the file map under the project directory."""
    try:
        state["written"] = await asyncio.to_thread(materialize, state["target"].path, state["files"] or {})
        state["stage"] = GenerationStage.FILES_WRITTEN
    except GenerationError as e:
        return _fail(state, e)
    return state


async def report_node(state: GenerationState, agents: dict[str, Any]) -> GenerationState:
    """Reports the terminal outcome and issues the follow-up action."""
    target = state["target"]
    error = state["error"]

    if state["stage"] == GenerationStage.FAILED:
        status = OutcomeStatus.FAILED
    elif state["fallback_used"]:
        status = OutcomeStatus.FALLBACK_USED
    else:
        status = OutcomeStatus.SUCCEEDED

    outcome = GenerationOutcome(
        status=status,
        project_name=target.project_name if target else None,
        project_path=target.path if target else None,
        files=list(state["written"]),
        error=str(error) if error else None,
        error_type=type(error).__name__ if error else None,
    )
    state["outcome"] = outcome
    agents["notifier"].report(outcome)

    if status == OutcomeStatus.FAILED:
        return state

    follow_up = agents.get("follow_up")
    if follow_up is not None:
        follow_up(outcome.project_path)
    state["stage"] = GenerationStage.REPORTED
    return state
