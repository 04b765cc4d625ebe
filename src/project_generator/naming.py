"""Project directory naming."""

import itertools
import logging
import re
from pathlib import Path

from project_generator.components.types import CollisionPolicy, ProjectTarget
from project_generator.constants import DEFAULT_PROJECT_NAME, MAX_PROJECT_NAME_LENGTH, NAME_TOKEN_COUNT
from project_generator.errors import ConfigurationError, NameCollisionError

logger = logging.getLogger(__name__)

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_ALPHANUMERIC = re.compile(r"[a-z0-9]")


def sanitize_project_name(description: str) -> str:
    """Derive a directory name from the first words of a description.

    The first three whitespace-separated words are joined with ``-``,
    lowercased and stripped of anything outside ``[a-z0-9-]``. The result is
    capped at ``MAX_PROJECT_NAME_LENGTH`` characters. When nothing
    alphanumeric survives, ``DEFAULT_PROJECT_NAME`` is returned instead.

    Args:
        description: Free-text project description

    Returns:
        A non-empty name matching ``[a-z0-9-]+``
    """
    words = description.split()[:NAME_TOKEN_COUNT]
    name = _INVALID_CHARS.sub("", "-".join(words).lower())
    name = name[:MAX_PROJECT_NAME_LENGTH].strip("-")
    if not _ALPHANUMERIC.search(name):
        return DEFAULT_PROJECT_NAME
    return name


def _suffixed(name: str, counter: int) -> str:
    suffix = f"-{counter}"
    base = name[: MAX_PROJECT_NAME_LENGTH - len(suffix)].rstrip("-")
    return f"{base}{suffix}"


def resolve_project_target(workspace: Path, description: str, policy: CollisionPolicy = CollisionPolicy.FAIL) -> ProjectTarget:
    """Pick the project directory for a description under a workspace.

    Raises:
        ConfigurationError: The workspace does not exist or is not a directory
        NameCollisionError: The directory exists and the policy is ``fail``
    """
    if not workspace.is_dir():
        raise ConfigurationError(f"Please open a workspace folder first: {workspace} is not a directory")

    root = workspace.resolve()
    name = sanitize_project_name(description)

    if (root / name).exists():
        if policy == CollisionPolicy.FAIL:
            raise NameCollisionError(root / name)
        if policy == CollisionPolicy.SUFFIX:
            for counter in itertools.count(2):
                candidate = _suffixed(name, counter)
                if not (root / candidate).exists():
                    logger.info("Project directory %s exists, using %s", name, candidate)
                    name = candidate
                    break
        else:
            logger.warning("Project directory %s exists and will be overwritten", root / name)

    return ProjectTarget(root_directory=root, project_name=name)
