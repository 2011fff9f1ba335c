"""Shared pytest fixtures for taskmd tests."""

import tempfile
from pathlib import Path

import pytest

RESOURCES_DIR = Path(__file__).parent / "resources"

BUILD_MANIFEST = (RESOURCES_DIR / "build.yaml").read_text()

BUILD_README = """# `build`

Builds the app.

## Parameters
* **image**: 

## Workspaces
* **source** (optional): 

## Results
* **digest**: 
"""

GIT_CLONE_README = """# `git-clone`

Clones a git repository into the output workspace.

## Parameters
* **url**: Repository URL to clone from.
* **revision**: Revision to checkout. `(Default: main)`
* **refspecs**: Refspecs to fetch. `(Default: [refs/heads/main, refs/tags/*])`
* **env**: Extra environment. `(Default: {})`

## Workspaces
* **output**: The git repo will be cloned onto this volume.
* **ssh-directory** (optional): A .ssh directory with private key.

## Results
* **commit**: The precise commit SHA that was fetched.
* **url**: The precise URL that was fetched.
"""


def write_manifest(parent_dir: Path, file_name: str, content: str) -> Path:
    """Helper to write a manifest file.

    Args:
        parent_dir: Directory to create the manifest in.
        file_name: Name of the manifest file.
        content: YAML or JSON content.

    Returns:
        Path to the written manifest.
    """
    parent_dir.mkdir(parents=True, exist_ok=True)
    manifest = parent_dir / file_name
    manifest.write_text(content)
    return manifest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def build_manifest(temp_dir):
    """Copy of the build.yaml fixture inside the temporary directory."""
    return write_manifest(temp_dir / "tasks", "build.yaml", (RESOURCES_DIR / "build.yaml").read_text())


@pytest.fixture
def git_clone_manifest(temp_dir):
    """Copy of the git-clone.yaml fixture inside the temporary directory."""
    return write_manifest(temp_dir / "tasks", "git-clone.yaml", (RESOURCES_DIR / "git-clone.yaml").read_text())


@pytest.fixture
def kustomize_output():
    """Sample multi-document output of `kustomize build`."""
    return (RESOURCES_DIR / "kustomize_output.yaml").read_text()


@pytest.fixture
def output_dir(temp_dir):
    """Output directory inside the temporary directory (not created)."""
    return temp_dir / "taskmd.out"
