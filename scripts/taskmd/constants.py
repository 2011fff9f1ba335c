"""Constants and shared configuration for the taskmd package."""

# Default directory that receives the generated documentation
DEFAULT_OUTPUT_DIR = "taskmd.out"

# Environment variable overriding the kustomize executable
KUSTOMIZE_BIN_ENV = "TASKMD_KUSTOMIZE_BIN"
DEFAULT_KUSTOMIZE_BIN = "kustomize"

# Templates
TASK_README_TEMPLATE = "TASK_README.md.j2"

# Output file names
README_FILENAME = "README.md"
MARKDOWN_SUFFIX = ".md"

# Resource kind documented by the kustomize pipeline
TASK_KIND = "Task"

# Exit codes
EXIT_SUCCESS = 0  # All documents written
EXIT_ERROR = 1  # Load, build, render or write failure
