"""Generate Markdown reference documentation for Tekton Task manifests.

Task manifests are read either from individual YAML/JSON files or from the
output of a kustomize build, and rendered into one Markdown document per task.
"""

from scripts.taskmd.content_generator import TaskContentGenerator, stringify_param_value
from scripts.taskmd.manifest_loader import load_task_bundles
from scripts.taskmd.writer import TaskReadmeWriter

__all__ = [
    "TaskContentGenerator",
    "TaskReadmeWriter",
    "load_task_bundles",
    "stringify_param_value",
]
