"""User-visible reporting of generation outcomes."""

from typing import Protocol

import click

from project_generator.components.types import GenerationOutcome, OutcomeStatus

FALLBACK_WARNING = "Could not parse AI response, created basic structure"


class Notifier(Protocol):
    def report(self, outcome: GenerationOutcome) -> None: ...


class ClickNotifier:
    """Prints one message per outcome to the terminal."""

    def report(self, outcome: GenerationOutcome) -> None:
        if outcome.status == OutcomeStatus.FAILED:
            click.secho(f"Error: {outcome.error}", fg="red", err=True)
        elif outcome.status == OutcomeStatus.FALLBACK_USED:
            click.secho(f"Warning: {FALLBACK_WARNING} in {outcome.project_path}", fg="yellow")
        else:
            click.secho(f'Project "{outcome.project_name}" created successfully at {outcome.project_path}', fg="green")
