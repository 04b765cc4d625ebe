"""Command-line interface for the project generator."""

import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from project_generator.components.models import ModelRegistry
from project_generator.components.types import CollisionPolicy, FollowUpAction, GenerationRequest, ProjectType
from project_generator.constants import DEFAULT_MODEL, DEFAULT_REQUEST_TIMEOUT
from project_generator.errors import ConfigurationError
from project_generator.follow_up import FollowUpRunner
from project_generator.model_client import ModelClient
from project_generator.orchestration.orchestration import ProjectGenerationOrchestrator


def setup_logging(log_level: str) -> None:
    """Set up logging configuration."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level.",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Model configuration YAML file.")
@click.pass_context
def cli(ctx: click.Context, log_level: str, config_path: Optional[Path]) -> None:
    """Project Generator - create whole projects from a description.

    Ask an LLM for the files of a new project and write them into the workspace.
    """
    setup_logging(log_level)
    load_dotenv()

    ctx.ensure_object(dict)
    try:
        ctx.obj["registry"] = ModelRegistry(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


# Models Commands
@cli.group()
def model():
    """Manage model configurations."""
    pass


@model.command(name="list")
@click.pass_context
def list_models(ctx: click.Context):
    """List available models."""
    registry = ctx.obj["registry"]
    models = registry.list_models()

    if not models:
        click.echo("No models configured.")
        return

    # Find the longest name for alignment
    max_name_length = max(len(name) for name in models)

    click.echo("\nAvailable Models:")
    click.echo("=" * (max_name_length + 40))

    for name, config in models.items():
        click.echo(f"{name:<{max_name_length}}    {config['provider']:<10}{config['model_id']}")


@cli.group()
def project():
    """Generate projects."""
    pass


class ProjectTypeParamType(click.ParamType):
    """Click parameter type for ProjectType enum."""

    name = "project_type"

    def convert(self, value, param, ctx):
        if isinstance(value, ProjectType):
            return value
        for project_type in ProjectType:
            if project_type.value.lower() == value.strip().lower():
                return project_type
        valid_types = [p.value for p in ProjectType]
        self.fail(f"Invalid project type '{value}'. Valid options are: {', '.join(valid_types)}", param, ctx)


@project.command(name="types")
def list_project_types():
    """List the project types that can be generated."""
    max_name_length = max(len(p.value) for p in ProjectType)
    for project_type in ProjectType:
        click.echo(f"{project_type.value:<{max_name_length}}    {project_type.summary}")


@project.command()
@click.argument("description", required=True)
@click.option("--type", "project_type", type=ProjectTypeParamType(), required=True, help="Kind of project, see 'project types'.")
@click.option(
    "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory the project folder is created in.",
)
@click.option("--model", default=DEFAULT_MODEL, show_default=True)
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=DEFAULT_REQUEST_TIMEOUT, show_default=True, help="Model request timeout in seconds.")
@click.option(
    "--on-collision",
    type=click.Choice([p.value for p in CollisionPolicy]),
    default=CollisionPolicy.FAIL.value,
    show_default=True,
    help="What to do when the project directory already exists.",
)
@click.option(
    "--follow-up",
    type=click.Choice([a.value for a in FollowUpAction]),
    default=FollowUpAction.NONE.value,
    show_default=True,
    help="Open the project or install its dependencies afterwards.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    description: str,
    project_type: ProjectType,
    workspace: Path,
    model: str,
    timeout: float,
    on_collision: str,
    follow_up: str,
):
    """Generate a project from DESCRIPTION."""
    try:
        request = GenerationRequest(project_type=project_type.value, description=description)
    except ValidationError as e:
        messages = "; ".join(error["msg"].removeprefix("Value error, ") for error in e.errors())
        click.echo(f"Error: {messages}", err=True)
        ctx.exit(1)

    try:
        client = ModelClient.from_registry(ctx.obj["registry"], model, timeout=timeout)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    orchestrator = ProjectGenerationOrchestrator(
        client=client,
        collision_policy=CollisionPolicy(on_collision),
        follow_up=FollowUpRunner(FollowUpAction(follow_up)),
    )
    outcome = orchestrator.run(request, workspace)

    if outcome.failed:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
