"""Command-line interface for the taskmd package."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from scripts.taskmd.config import TaskmdConfig, default_kustomize_bin
from scripts.taskmd.constants import DEFAULT_OUTPUT_DIR, EXIT_ERROR, EXIT_SUCCESS, KUSTOMIZE_BIN_ENV
from scripts.taskmd.errors import TaskmdError
from scripts.taskmd.kustomize import build_tasks
from scripts.taskmd.manifest_loader import load_task_bundles
from scripts.taskmd.writer import TaskReadmeWriter

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help=f"Directory that receives the generated documentation (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the file-based pipeline.

    Args:
        argv: Arguments to parse (defaults to sys.argv).

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="taskmd",
        description="Generate Markdown documentation for Tekton Task manifests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The output directory is removed and recreated on every run. Each task gets a
directory named after it holding README.md and a copy of its manifest.

Examples:
  taskmd tasks/build.yaml tasks/deploy.yaml
  taskmd --output-dir docs/tasks tasks/*.yaml
  python -m scripts.taskmd tasks/build.yaml
        """,
    )
    parser.add_argument(
        "task_files",
        nargs="+",
        type=Path,
        metavar="task-file",
        help="Path to a YAML or JSON Tekton Task manifest",
    )
    _add_common_arguments(parser)
    return parser.parse_args(argv)


def parse_kustomize_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the kustomize pipeline.

    Args:
        argv: Arguments to parse (defaults to sys.argv).

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="taskmd-kustomize",
        description="Generate Markdown documentation for the Tekton Tasks of a kustomize directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The output directory is created if missing and is never cleaned. Each task is
written as <task-name>.md.

Examples:
  taskmd-kustomize overlays/prod
  taskmd-kustomize --kustomize-bin /usr/local/bin/kustomize overlays/prod
        """,
    )
    parser.add_argument(
        "kustomize_dir",
        type=Path,
        metavar="kustomize-dir",
        help="Root of the kustomize project",
    )
    parser.add_argument(
        "--kustomize-bin",
        default=default_kustomize_bin(),
        help=f"kustomize executable (default: ${KUSTOMIZE_BIN_ENV} or kustomize)",
    )
    _add_common_arguments(parser)
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    # Successful runs stay silent unless --verbose is given
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")


def run(task_files: List[Path], config: TaskmdConfig) -> None:
    """Document the given manifest files into the configured output directory."""
    bundles = load_task_bundles(task_files)
    TaskReadmeWriter(config.output_dir).write_bundles(bundles)


def run_kustomize(kustomize_dir: Path, config: TaskmdConfig) -> None:
    """Document the Tasks of a kustomize directory into the configured output directory."""
    tasks = build_tasks(kustomize_dir, config.kustomize_bin)
    TaskReadmeWriter(config.output_dir).write_tasks(tasks)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the file-based CLI."""
    args = parse_arguments(argv)
    _configure_logging(args.verbose)

    config = TaskmdConfig(output_dir=args.output_dir)
    try:
        run(args.task_files, config)
    except (TaskmdError, OSError) as e:
        logger.error(str(e))
        sys.exit(EXIT_ERROR)

    sys.exit(EXIT_SUCCESS)


def kustomize_main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the kustomize CLI."""
    args = parse_kustomize_arguments(argv)
    _configure_logging(args.verbose)

    config = TaskmdConfig(output_dir=args.output_dir, kustomize_bin=args.kustomize_bin)
    try:
        run_kustomize(args.kustomize_dir, config)
    except (TaskmdError, OSError) as e:
        logger.error(str(e))
        sys.exit(EXIT_ERROR)

    sys.exit(EXIT_SUCCESS)
