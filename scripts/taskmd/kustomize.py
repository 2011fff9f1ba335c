"""Build a kustomize directory and collect the Tasks it produces."""

import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from scripts.taskmd.constants import DEFAULT_KUSTOMIZE_BIN, TASK_KIND
from scripts.taskmd.errors import KustomizeBuildError, ManifestDecodeError
from scripts.taskmd.task import Task

logger = logging.getLogger(__name__)


def kustomize_build(directory: Path, kustomize_bin: str = DEFAULT_KUSTOMIZE_BIN) -> List[Dict[str, Any]]:
    """Run ``kustomize build`` over a directory.

    Args:
        directory: Root of the kustomize project.
        kustomize_bin: The kustomize executable to run.

    Returns:
        The resources emitted by kustomize, in emitted order.

    Raises:
        KustomizeBuildError: If kustomize cannot be run, fails, or emits invalid YAML.
    """
    args = [kustomize_bin, "build", str(directory)]
    logger.debug(f"Running: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise KustomizeBuildError(f"kustomize executable not found: {kustomize_bin}") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise KustomizeBuildError(f"kustomize build {directory} failed with exit code {e.returncode}: {stderr}") from e

    try:
        documents = list(yaml.safe_load_all(result.stdout))
    except yaml.YAMLError as e:
        raise KustomizeBuildError(f"kustomize build {directory} produced invalid YAML: {e}") from e

    resources = []
    for document in documents:
        if document is None:
            continue
        if not isinstance(document, dict):
            raise KustomizeBuildError(f"kustomize build {directory} produced a non-mapping resource")
        resources.append(document)

    logger.debug(f"kustomize build produced {len(resources)} resources")
    return resources


def get_tasks_from_resources(resources: Iterable[Dict[str, Any]]) -> List[Task]:
    """Decode every resource of kind Task.

    Resources of any other kind are skipped and the scan continues.

    Args:
        resources: Resources in the order kustomize emitted them.

    Returns:
        The decoded Tasks in the same order.

    Raises:
        ManifestDecodeError: If a Task resource cannot be decoded.
    """
    tasks = []
    for resource in resources:
        kind = resource.get("kind")
        metadata = resource.get("metadata")
        name = metadata.get("name", "") if isinstance(metadata, dict) else ""
        if kind != TASK_KIND:
            logger.debug(f"Skipping {kind} resource '{name}'")
            continue

        try:
            task = Task.from_dict(resource)
        except ManifestDecodeError as e:
            raise ManifestDecodeError(f"Task '{name}': {e.message}") from e

        tasks.append(task)
    return tasks


def build_tasks(directory: Path, kustomize_bin: str = DEFAULT_KUSTOMIZE_BIN) -> List[Task]:
    """Build a kustomize directory and return the Tasks it contains."""
    return get_tasks_from_resources(kustomize_build(directory, kustomize_bin))
