"""Writes generated Task documentation to the output directory."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from scripts.taskmd.constants import MARKDOWN_SUFFIX, README_FILENAME
from scripts.taskmd.content_generator import TaskContentGenerator
from scripts.taskmd.errors import OutputDirectoryError
from scripts.taskmd.task import Task, TaskBundle

logger = logging.getLogger(__name__)


class TaskReadmeWriter:
    """Writes Markdown documentation for Tekton Tasks."""

    def __init__(self, output_dir: Path):
        """Initialize the writer.

        Args:
            output_dir: Directory that receives the generated documentation.
        """
        self.output_dir = Path(output_dir)

    def _write_file(self, file_path: Path, content: str) -> None:
        with open(file_path, "w", encoding="utf-8") as f:
            logger.debug(f"Writing {file_path}")
            f.write(content)

    def _reset_output_dir(self) -> None:
        """Remove the output directory if it exists and recreate it empty."""
        if self.output_dir.exists():
            logger.debug(f"Removing existing output directory {self.output_dir}")
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True)

    def write_bundle(self, bundle: TaskBundle) -> Path:
        """Write one task's README.md and a copy of its manifest into a directory named after the task.

        Args:
            bundle: The task and the manifest it was loaded from.

        Returns:
            Path to the task directory.
        """
        task_dir = self.output_dir / bundle.task.name
        task_dir.mkdir(parents=True, exist_ok=True)

        content = TaskContentGenerator(bundle.task).generate_markdown()
        self._write_file(task_dir / README_FILENAME, content)

        manifest_copy = task_dir / bundle.source_path.name
        manifest_copy.write_bytes(bundle.source_bytes)
        logger.debug(f"Copied {bundle.source_path} to {manifest_copy}")

        return task_dir

    def _check_output_dir(self, bundles: List[TaskBundle]) -> None:
        """Refuse to wipe a directory that holds the working directory or any input manifest.

        Raises:
            OutputDirectoryError: If wiping the output directory would delete either.
        """
        output_dir = self.output_dir.resolve()
        if Path.cwd().resolve().is_relative_to(output_dir):
            raise OutputDirectoryError(
                f"Output directory {self.output_dir} contains the working directory and cannot be wiped"
            )
        for bundle in bundles:
            if bundle.source_path.resolve().is_relative_to(output_dir):
                raise OutputDirectoryError(
                    f"Output directory {self.output_dir} contains the input manifest {bundle.source_path}"
                )

    def write_bundles(self, bundles: Iterable[TaskBundle]) -> None:
        """Rebuild the output directory from the loaded manifests.

        The output directory is wiped first. The first failure aborts the
        remaining writes and nothing already written is rolled back.

        Args:
            bundles: Tasks with their source manifests, in output order.

        Raises:
            OutputDirectoryError: If the output directory holds the working directory or an input.
        """
        bundles = list(bundles)
        self._check_output_dir(bundles)
        self._reset_output_dir()
        for bundle in bundles:
            task_dir = self.write_bundle(bundle)
            logger.info(f"Task documentation generated at {task_dir}")

    def write_task(self, task: Task) -> Path:
        """Write one task's document as ``<name>.md`` directly in the output directory.

        Args:
            task: The task to document.

        Returns:
            Path to the written document.
        """
        file_path = self.output_dir / f"{task.name}{MARKDOWN_SUFFIX}"
        self._write_file(file_path, TaskContentGenerator(task).generate_markdown())
        return file_path

    def write_tasks(self, tasks: Iterable[Task]) -> None:
        """Write one document per task, keeping whatever the output directory already holds.

        Args:
            tasks: The tasks to document, in output order.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for task in tasks:
            file_path = self.write_task(task)
            logger.info(f"Task documentation generated at {file_path}")
