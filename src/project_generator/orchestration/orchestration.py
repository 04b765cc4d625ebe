"""Orchestration of a single project generation request."""

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional

from langgraph.graph import END, START, StateGraph

from project_generator.components.types import CollisionPolicy, GenerationOutcome, GenerationRequest, GenerationStage
from project_generator.model_client import ModelClient
from project_generator.notifier import ClickNotifier, Notifier

from .nodes import derive_name_node, parse_response_node, report_node, request_model_node, write_files_node
from .state import GenerationState, create_initial_state


def _route(state: GenerationState) -> str:
    return "failed" if state["stage"] == GenerationStage.FAILED else "continue"


class ProjectGenerationOrchestrator:
    """Runs name derivation, model request, parsing and writing for each request.

    Every call to ``generate`` is independent. Two concurrent calls that would
    write into the same directory are not allowed; the second one fails with
    ``ProjectBusyError``.
    """

    def __init__(
        self,
        client: ModelClient,
        notifier: Optional[Notifier] = None,
        collision_policy: CollisionPolicy = CollisionPolicy.FAIL,
        follow_up: Optional[Callable[[Path], None]] = None,
    ):
        self.client = client
        self.notifier = notifier or ClickNotifier()
        self.collision_policy = collision_policy
        self.follow_up = follow_up
        self._in_flight: set[Path] = set()

    def _create_workflow(self, agents: dict[str, Any]) -> StateGraph:
        workflow = StateGraph(state_schema=GenerationState)

        async def derive_name(state: GenerationState) -> GenerationState:
            return await derive_name_node(state, agents)

        async def request_model(state: GenerationState) -> GenerationState:
            return await request_model_node(state, agents)

        async def parse_model_response(state: GenerationState) -> GenerationState:
            return await parse_response_node(state, agents)

        async def write_files(state: GenerationState) -> GenerationState:
            return await write_files_node(state, agents)

        async def report(state: GenerationState) -> GenerationState:
            return await report_node(state, agents)

        workflow.add_node("derive_name", derive_name)
        workflow.add_node("request_model", request_model)
        workflow.add_node("parse_response", parse_model_response)
        workflow.add_node("write_files", write_files)
        workflow.add_node("report", report)

        # Failures skip straight to reporting
        workflow.add_edge(START, "derive_name")
        workflow.add_conditional_edges("derive_name", _route, {"continue": "request_model", "failed": "report"})
        workflow.add_conditional_edges("request_model", _route, {"continue": "parse_response", "failed": "report"})
        workflow.add_edge("parse_response", "write_files")
        workflow.add_edge("write_files", "report")
        workflow.add_edge("report", END)

        return workflow

    async def generate(self, request: GenerationRequest, workspace: Path) -> GenerationOutcome:
        """Generate a project for a request under ``workspace``.

        Returns the terminal outcome; generation errors are reported, not raised.
        Cancelling the task running this coroutine stops the request.
        """
        claims: list[Path] = []
        agents = {
            "client": self.client,
            "notifier": self.notifier,
            "collision_policy": self.collision_policy,
            "follow_up": self.follow_up,
            "in_flight": self._in_flight,
            "claims": claims,
        }
        compiled_workflow = self._create_workflow(agents).compile()

        try:
            final_state = await compiled_workflow.ainvoke(create_initial_state(request, workspace))
        finally:
            for path in claims:
                self._in_flight.discard(path)

        return final_state["outcome"]

    def run(self, request: GenerationRequest, workspace: Path) -> GenerationOutcome:
        """Synchronous wrapper around ``generate``."""
        return asyncio.run(self.generate(request, workspace))
