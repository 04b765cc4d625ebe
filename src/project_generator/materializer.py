"""Write a file map to disk under a project root."""

import logging
from pathlib import Path, PurePosixPath, PureWindowsPath

from project_generator.components.types import FileMap
from project_generator.errors import FileWriteError, PathEscapeError

logger = logging.getLogger(__name__)


def resolve_file_path(root: Path, relative: str) -> Path:
    """Resolve a generated file path, refusing anything outside ``root``.

    Args:
        root: Project root directory
        relative: Forward-slash relative path from the model response

    Returns:
        Absolute path of the file inside the root

    Raises:
        PathEscapeError: The path is absolute, contains ``..`` or resolves outside root
        FileWriteError: The path is empty or names a directory
    """
    normalized = relative.replace("\\", "/")
    if not normalized.strip() or normalized.endswith("/"):
        raise FileWriteError(f"Invalid file path: {relative!r}", path=relative)

    posix_path = PurePosixPath(normalized)
    if posix_path.is_absolute() or PureWindowsPath(normalized).drive:
        raise PathEscapeError(relative)
    if ".." in posix_path.parts:
        raise PathEscapeError(relative)

    resolved_root = root.resolve()
    try:
        resolved = resolved_root.joinpath(*posix_path.parts).resolve()
    except (OSError, ValueError) as e:
        raise FileWriteError(f"Invalid file path: {relative!r}: {e}", path=relative) from e

    # Symlinks inside an existing root can still point elsewhere
    if resolved == resolved_root or not resolved.is_relative_to(resolved_root):
        raise PathEscapeError(relative)
    return resolved


def materialize(root: Path, files: FileMap) -> list[str]:
    """Write every file of a file map under ``root``.

    All paths are checked before anything is written. Files are then written
    in map order; the first failure stops the remaining writes and leaves the
    files already written in place.

    Returns:
        Relative paths written, in write order
    """
    planned = [(relative, resolve_file_path(root, relative), content) for relative, content in files.items()]

    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteError(f"Cannot create project directory {root}: {e}", path=str(root)) from e

    written = []
    for relative, file_path, content in planned:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content.encode("utf-8"))
        except (OSError, UnicodeEncodeError) as e:
            raise FileWriteError(f"Error saving {relative}: {e}", path=relative) from e
        logger.debug("Wrote %s", file_path)
        written.append(relative)

    logger.info("Wrote %d files to %s", len(written), root)
    return written
