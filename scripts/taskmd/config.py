"""Run configuration for taskmd."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from scripts.taskmd.constants import DEFAULT_KUSTOMIZE_BIN, DEFAULT_OUTPUT_DIR, KUSTOMIZE_BIN_ENV


def default_kustomize_bin() -> str:
    """Get the kustomize executable, honouring the TASKMD_KUSTOMIZE_BIN override."""
    return os.environ.get(KUSTOMIZE_BIN_ENV) or DEFAULT_KUSTOMIZE_BIN


@dataclass
class TaskmdConfig:
    """Configuration shared by both documentation pipelines."""

    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    kustomize_bin: str = field(default_factory=default_kustomize_bin)
