"""Markdown content generator for Tekton Tasks."""

import logging
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader

from scripts.taskmd.constants import TASK_README_TEMPLATE
from scripts.taskmd.task import PARAM_TYPE_ARRAY, PARAM_TYPE_STRING, ParamValue, Task

logger = logging.getLogger(__name__)


def stringify_param_value(value: ParamValue) -> str:
    """Render a parameter value the way it is shown in a ``(Default: ...)`` note.

    Args:
        value: The parameter value.

    Returns:
        The string verbatim, an array as ``[a, b, c]``, or ``{}`` for any object.
    """
    if value.type == PARAM_TYPE_STRING:
        return value.string_val
    if value.type == PARAM_TYPE_ARRAY:
        return "[" + ", ".join(value.array_val) + "]"
    # Object defaults are never expanded
    return "{}"


class TaskContentGenerator:
    """Generates the Markdown reference document for a single Task."""

    def __init__(self, task: Task):
        """Initialize the generator with a decoded Task.

        Args:
            task: The Task to document.
        """
        self.task = task

        # Set up Jinja2 environment
        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(TASK_README_TEMPLATE)

    def _prepare_parameters(self) -> List[Dict[str, str]]:
        parameters = []
        for param in self.task.params:
            default_str = ""
            if param.default is not None:
                default_str = f" `(Default: {stringify_param_value(param.default)})`"
            parameters.append(
                {
                    "name": param.name,
                    "description": param.description,
                    "default_str": default_str,
                }
            )
        return parameters

    def _prepare_workspaces(self) -> List[Dict[str, str]]:
        return [
            {
                "name": workspace.name,
                "description": workspace.description,
                "optional_str": " (optional)" if workspace.optional else "",
            }
            for workspace in self.task.workspaces
        ]

    def _prepare_template_context(self) -> Dict[str, Any]:
        """Prepare the context data for the Jinja2 template.

        Returns:
            Dictionary containing all variables needed by the template.
        """
        return {
            "name": self.task.name,
            "description": self.task.description,
            "parameters": self._prepare_parameters(),
            "workspaces": self._prepare_workspaces(),
            "results": [{"name": r.name, "description": r.description} for r in self.task.results],
        }

    def generate_markdown(self) -> str:
        """Generate the complete Markdown document for the Task.

        Returns:
            The document with header, description, parameters, workspaces and results sections.
        """
        context = self._prepare_template_context()
        logger.debug(
            f"Rendering task '{self.task.name}': {len(context['parameters'])} parameters, "
            f"{len(context['workspaces'])} workspaces, {len(context['results'])} results"
        )
        return self.template.render(**context)
