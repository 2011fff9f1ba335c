"""Tests for writer.py module."""

import pytest

from ..errors import OutputDirectoryError
from ..manifest_loader import load_task_bundles
from ..task import Task
from ..writer import TaskReadmeWriter
from .conftest import BUILD_MANIFEST, BUILD_README, write_manifest


def _snapshot(directory):
    return {str(p.relative_to(directory)): p.read_bytes() for p in sorted(directory.rglob("*")) if p.is_file()}


class TestWriteBundles:
    """Tests for the file-based output layout."""

    def test_build_example(self, build_manifest, output_dir):
        """Test the README and the manifest copy for the build.yaml example."""
        TaskReadmeWriter(output_dir).write_bundles(load_task_bundles([build_manifest]))

        task_dir = output_dir / "build"
        assert (task_dir / "README.md").read_text(encoding="utf-8") == BUILD_README
        assert (task_dir / "build.yaml").read_bytes() == build_manifest.read_bytes()

    def test_manifest_copy_is_byte_identical(self, temp_dir, output_dir):
        """Test that the copied manifest keeps comments, spacing and encoding."""
        content = "# leading comment\nmetadata:\n  name: café\nspec:\n    description:   'spaced'  \r\n"
        manifest = temp_dir / "odd-name.yml"
        manifest.write_bytes(content.encode("utf-8"))

        TaskReadmeWriter(output_dir).write_bundles(load_task_bundles([manifest]))

        assert (output_dir / "café" / "odd-name.yml").read_bytes() == content.encode("utf-8")

    def test_output_dir_is_wiped(self, build_manifest, output_dir):
        """Test that stale content is removed on every run."""
        stale = output_dir / "old-task" / "README.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("stale")

        TaskReadmeWriter(output_dir).write_bundles(load_task_bundles([build_manifest]))

        assert not stale.exists()
        assert sorted(p.name for p in output_dir.iterdir()) == ["build"]

    def test_idempotent(self, build_manifest, git_clone_manifest, output_dir):
        """Test that running twice produces the same tree."""
        writer = TaskReadmeWriter(output_dir)

        writer.write_bundles(load_task_bundles([build_manifest, git_clone_manifest]))
        first = _snapshot(output_dir)
        writer.write_bundles(load_task_bundles([build_manifest, git_clone_manifest]))

        assert _snapshot(output_dir) == first
        assert set(first) == {
            "build/README.md",
            "build/build.yaml",
            "git-clone/README.md",
            "git-clone/git-clone.yaml",
        }

    def test_name_collision_overwrites(self, temp_dir, output_dir):
        """Test that two manifests with the same task name share a directory and the last one wins."""
        first = write_manifest(temp_dir / "a", "one.yaml", "metadata:\n  name: same\nspec:\n  description: first\n")
        second = write_manifest(temp_dir / "b", "two.yaml", "metadata:\n  name: same\nspec:\n  description: second\n")

        TaskReadmeWriter(output_dir).write_bundles(load_task_bundles([first, second]))

        task_dir = output_dir / "same"
        assert "second" in (task_dir / "README.md").read_text()
        assert (task_dir / "one.yaml").exists()
        assert (task_dir / "two.yaml").exists()

    def test_filesystem_failure_aborts_remaining_writes(self, build_manifest, temp_dir, output_dir):
        """Test that a filesystem failure propagates and earlier output is kept."""
        # The second task's directory would have to replace the first task's README
        clash = write_manifest(temp_dir / "tasks", "clash.yaml", "metadata:\n  name: build/README.md\n")
        bundles = load_task_bundles([build_manifest, clash])

        with pytest.raises(OSError):
            TaskReadmeWriter(output_dir).write_bundles(bundles)

        assert (output_dir / "build" / "README.md").read_text() == BUILD_README

    def test_manifest_copy_comes_from_loaded_bytes(self, build_manifest, output_dir):
        """Test that the sources are not read again once loaded."""
        bundles = load_task_bundles([build_manifest])
        original = build_manifest.read_bytes()
        build_manifest.unlink()

        TaskReadmeWriter(output_dir).write_bundles(bundles)

        assert (output_dir / "build" / "build.yaml").read_bytes() == original

    def test_input_inside_output_dir_is_rejected(self, output_dir):
        """Test that re-documenting a previous run's manifest copy keeps the manifest."""
        manifest = write_manifest(output_dir / "build", "build.yaml", BUILD_MANIFEST)
        bundles = load_task_bundles([manifest])

        with pytest.raises(OutputDirectoryError, match="contains the input manifest"):
            TaskReadmeWriter(output_dir).write_bundles(bundles)

        assert manifest.read_text() == BUILD_MANIFEST

    def test_output_dir_holding_working_directory_is_rejected(self, build_manifest, temp_dir, monkeypatch):
        """Test that the working directory and its parents are never wiped."""
        workdir = temp_dir / "work"
        workdir.mkdir()
        (workdir / "keep.txt").write_text("keep")
        monkeypatch.chdir(workdir)
        bundles = load_task_bundles([build_manifest])

        for output_dir in (".", str(temp_dir)):
            with pytest.raises(OutputDirectoryError, match="working directory"):
                TaskReadmeWriter(output_dir).write_bundles(bundles)

        assert (workdir / "keep.txt").read_text() == "keep"
        assert build_manifest.exists()


class TestWriteTasks:
    """Tests for the kustomize output layout."""

    def test_writes_flat_markdown_files(self, output_dir):
        """Test that each task is written as <name>.md."""
        TaskReadmeWriter(output_dir).write_tasks([Task(name="a"), Task(name="b", description="B")])

        assert sorted(p.name for p in output_dir.iterdir()) == ["a.md", "b.md"]
        assert (output_dir / "b.md").read_text().startswith("# `b`\n\nB\n\n## Parameters\n")

    def test_existing_content_is_kept(self, output_dir):
        """Test that the output directory is not cleaned."""
        output_dir.mkdir()
        (output_dir / "stale.md").write_text("stale")
        (output_dir / "a.md").write_text("old")

        TaskReadmeWriter(output_dir).write_tasks([Task(name="a")])

        assert (output_dir / "stale.md").read_text() == "stale"
        assert (output_dir / "a.md").read_text().startswith("# `a`")

    def test_creates_nested_output_dir(self, temp_dir):
        """Test that missing parent directories are created."""
        output_dir = temp_dir / "docs" / "tasks"

        TaskReadmeWriter(output_dir).write_tasks([Task(name="a")])

        assert (output_dir / "a.md").exists()
