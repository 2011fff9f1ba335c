"""Loader for Task manifest files."""

import logging
from pathlib import Path
from typing import Iterable, List

import yaml

from scripts.taskmd.errors import ManifestDecodeError
from scripts.taskmd.task import Task, TaskBundle

logger = logging.getLogger(__name__)


def decode_task(source: bytes, file_path: Path) -> Task:
    """Decode the raw bytes of a Task manifest.

    Args:
        source: The manifest content.
        file_path: Path the content was read from, used in error messages.

    Returns:
        The decoded Task.

    Raises:
        ManifestDecodeError: If the content is not a valid Task document.
    """
    try:
        data = yaml.safe_load(source.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ManifestDecodeError(f"{file_path}: not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestDecodeError(f"{file_path}: invalid YAML: {e}") from e

    if data is None:
        raise ManifestDecodeError(f"{file_path}: document is empty")

    try:
        return Task.from_dict(data)
    except ManifestDecodeError as e:
        raise ManifestDecodeError(f"{file_path}: {e.message}") from e


def load_task(file_path: Path) -> Task:
    """Load and decode a single Task manifest.

    Args:
        file_path: Path to a YAML or JSON Task manifest.

    Returns:
        The decoded Task.

    Raises:
        OSError: If the file cannot be read.
        ManifestDecodeError: If the file is not a valid Task document.
    """
    return decode_task(Path(file_path).read_bytes(), file_path)


def load_task_bundles(file_paths: Iterable[Path]) -> List[TaskBundle]:
    """Load every manifest, keeping the order of the given paths.

    The manifest bytes are kept on each bundle so that the output can be
    written without reading the sources again. The first failure aborts the
    whole load.

    Args:
        file_paths: Paths to the Task manifests.

    Returns:
        One TaskBundle per path.
    """
    bundles = []
    for file_path in file_paths:
        file_path = Path(file_path)
        logger.debug(f"Loading task manifest: {file_path}")
        source = file_path.read_bytes()
        task = decode_task(source, file_path)
        logger.debug(f"Decoded task '{task.name}' with {len(task.params)} parameters")
        bundles.append(TaskBundle(task=task, source_path=file_path, source_bytes=source))
    return bundles
