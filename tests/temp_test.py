import os

import pytest

from fskit.core.attributes import exists
from fskit.core.attributes import is_directory
from fskit.core.attributes import is_regular_file
from fskit.core.config import Config
from fskit.core.operations import create_directories
from fskit.core.operations import create_file
from fskit.core.operations import delete_recursively
from fskit.core.paths import TEMP_DIRECTORY
from fskit.core.paths import canonical
from fskit.core.paths import is_descendant_of
from fskit.core.paths import join
from fskit.core.paths import last_segment
from fskit.core.paths import parent
from fskit.core.temp import TempDirectory
from fskit.core.temp import TempFile
from fskit.core.temp import with_temp_directory
from fskit.core.temp import with_temp_file


@pytest.mark.integration
class TestTempDirectory:
    def test_exists_only_inside_the_block(self):
        with TempDirectory() as path:
            assert is_directory(path)
            assert is_descendant_of(canonical(TEMP_DIRECTORY), path)
        assert not exists(path, follow_links=False)

    def test_path_is_canonical(self):
        with TempDirectory() as path:
            assert path == canonical(path)

    def test_removes_contents(self):
        with TempDirectory() as path:
            create_directories(join(path, "a", "b"))
            create_file(join(path, "a", "b", "file"), content="data")
            os.symlink(join(path, "a"), join(path, "link"))
        assert not exists(path, follow_links=False)

    def test_removes_on_error(self):
        paths = []
        with pytest.raises(RuntimeError, match="boom"):
            with TempDirectory() as path:
                paths.append(path)
                create_file(join(path, "file"))
                raise RuntimeError("boom")
        assert not exists(paths[0], follow_links=False)

    def test_directory_deleted_inside_the_block(self):
        with TempDirectory() as path:
            delete_recursively(path)
        assert not exists(path)

    def test_does_not_follow_links_out(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "data").write_text("keep")
        with TempDirectory() as path:
            os.symlink(outside, join(path, "link"))
        assert (outside / "data").read_text() == "keep"

    def test_prefix_and_directory(self, tmp_path):
        with TempDirectory("scratch", tmp_path) as path:
            assert parent(path) == canonical(tmp_path)
            assert last_segment(path).startswith("scratch")
        assert list(tmp_path.iterdir()) == []

    def test_configured_prefix(self, tmp_path):
        config = Config()
        config.temp.prefix = "configured"
        with TempDirectory(directory=tmp_path, config=config) as path:
            assert last_segment(path).startswith("configured")

    def test_path_is_reset_after_exit(self):
        scope = TempDirectory()
        with scope as path:
            assert scope.path == path
        assert scope.path is None


@pytest.mark.integration
class TestTempFile:
    def test_exists_only_inside_the_block(self):
        with TempFile() as (directory, file):
            assert is_directory(directory)
            assert is_regular_file(file)
            assert parent(file) == directory
            assert file.endswith(".tmp")
        assert not exists(directory)
        assert not exists(file)

    def test_removes_siblings(self):
        with TempFile(suffix=".txt") as (directory, file):
            assert file.endswith(".txt")
            create_file(join(directory, "sibling"))
        assert not exists(directory)

    def test_removes_on_error(self):
        paths = []
        with pytest.raises(KeyError):
            with TempFile() as entries:
                paths.extend(entries)
                raise KeyError("boom")
        assert paths
        assert not any(exists(path) for path in paths)


@pytest.mark.integration
class TestWithTemp:
    def test_with_temp_directory_returns_result(self):
        seen = []

        def body(path):
            seen.append(path)
            create_file(join(path, "file"), content="abc")
            return os.listdir(path)

        assert with_temp_directory(body) == ["file"]
        assert not exists(seen[0])

    def test_with_temp_directory_propagates_errors(self):
        seen = []

        def body(path):
            seen.append(path)
            raise ValueError("failure")

        with pytest.raises(ValueError, match="failure"):
            with_temp_directory(body, "failing")
        assert last_segment(seen[0]).startswith("failing")
        assert not exists(seen[0])

    def test_with_temp_file(self):
        seen = []

        def body(directory, file):
            seen.extend([directory, file])
            with open(file, "w") as handle:
                handle.write("content")
            return os.path.getsize(file)

        assert with_temp_file(body) == 7
        assert not any(exists(path) for path in seen)


if __name__ == "__main__":
    pytest.main([__file__])
