"""Entry point for running taskmd as a module.

Usage:
    python -m scripts.taskmd tasks/build.yaml tasks/deploy.yaml
    python -m scripts.taskmd --output-dir docs/tasks tasks/build.yaml
"""

from .cli import main

if __name__ == "__main__":
    main()
