"""Actions offered once a project is on disk."""

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional

import click

from project_generator.components.types import FollowUpAction
from project_generator.constants import INSTALL_COMMANDS

logger = logging.getLogger(__name__)


def detect_install_command(project_path: Path) -> Optional[tuple[str, ...]]:
    """Pick the package manager command for the manifest present in a project."""
    for manifest, command in INSTALL_COMMANDS:
        if (project_path / manifest).is_file():
            return command
    return None


def install_dependencies(project_path: Path, spawn: Callable[..., subprocess.Popen] = subprocess.Popen) -> Optional[subprocess.Popen]:
    """Start the dependency install in the project directory without waiting for it.

    Returns:
        The started process, or None when the project has no known manifest
    """
    command = detect_install_command(project_path)
    if command is None:
        logger.warning("No dependency manifest found in %s, skipping install", project_path)
        return None

    logger.info("Running %s in %s", " ".join(command), project_path)
    try:
        return spawn(list(command), cwd=str(project_path))
    except OSError as e:
        logger.error("Failed to start %s: %s", command[0], e)
        return None


def open_project(project_path: Path) -> None:
    """Open the project directory with the platform's file handler."""
    click.launch(str(project_path))


class FollowUpRunner:
    """Issues the configured follow-up action for a finished project."""

    def __init__(self, action: FollowUpAction = FollowUpAction.NONE, spawn: Callable[..., subprocess.Popen] = subprocess.Popen):
        self.action = action
        self.spawn = spawn

    def __call__(self, project_path: Path) -> None:
        if self.action == FollowUpAction.OPEN:
            open_project(project_path)
        elif self.action == FollowUpAction.INSTALL:
            install_dependencies(project_path, spawn=self.spawn)
