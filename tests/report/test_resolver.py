"""Tests for report/resolver.py.

Paths are resolved with explicit posixpath/ntpath so results do not depend
on the host running the tests.
"""

import ntpath
import posixpath

import pytest

from covsync.report.models import Coverage, CoverageClass, Line, Package, Source
from covsync.report.resolver import index_key, is_drive_root, join_root, resolve


def _coverage(roots: list[str], filenames: list[str]) -> Coverage:
    classes = tuple(
        CoverageClass(name=f"c{i}", relative_filename=f, lines=(Line(1, 1),))
        for i, f in enumerate(filenames)
    )
    return Coverage(
        sources=tuple(Source(root=r) for r in roots),
        packages=(Package(name="p", classes=classes),),
    )


class TestIsDriveRoot:
    """Tests for is_drive_root."""

    @pytest.mark.parametrize("root", ["C:", "d:", "C:\\", "D:/", " E: "])
    def test_drive_roots(self, root: str) -> None:
        """Bare drive designators are drive roots."""
        assert is_drive_root(root)

    @pytest.mark.parametrize("root", ["/repo", "C:\\src", "CD:", "", "repo"])
    def test_not_drive_roots(self, root: str) -> None:
        """Anything with a path after the drive is not."""
        assert not is_drive_root(root)


class TestJoinRoot:
    """Tests for join_root."""

    def test_posix_join(self) -> None:
        """Joins root and filename."""
        assert join_root("/repo", "src/a.cpp", posixpath) == "/repo/src/a.cpp"

    def test_posix_converts_backslashes(self) -> None:
        """Backslashes become separators on POSIX."""
        assert join_root("/repo", "src\\a.cpp", posixpath) == "/repo/src/a.cpp"

    def test_drive_is_root_not_drive_relative(self) -> None:
        """A bare drive joins at the drive root."""
        assert join_root("C:", "src\\a.cpp", ntpath) == "C:\\src\\a.cpp"

    def test_drive_with_forward_slashes(self) -> None:
        """Forward slashes become backslashes on Windows."""
        assert join_root("D:", "src/b.cpp", ntpath) == "D:\\src\\b.cpp"

    def test_absolute_filename_wins(self) -> None:
        """An absolute filename ignores the root."""
        assert join_root("/repo", "/abs/a.cpp", posixpath) == "/abs/a.cpp"

    def test_normalizes_dot_segments(self) -> None:
        """Dot segments are collapsed."""
        assert join_root("/repo/build", "../src/./a.cpp", posixpath) == "/repo/src/a.cpp"


class TestResolve:
    """Tests for resolve."""

    def test_scenario_single_root(self) -> None:
        """One root, one existing file, one entry."""
        coverage = _coverage(["/repo"], ["a.cpp"])
        index = resolve(coverage, lambda p: p == "/repo/a.cpp", pathmod=posixpath)

        assert list(index) == ["/repo/a.cpp"]
        assert index["/repo/a.cpp"].absolute_path == "/repo/a.cpp"
        assert index["/repo/a.cpp"].coverage_class.relative_filename == "a.cpp"

    def test_scenario_two_drives(self) -> None:
        """Only the drive where the file exists is kept."""
        coverage = _coverage(["C:", "D:"], ["b.cpp"])
        index = resolve(coverage, lambda p: p == "D:\\b.cpp", pathmod=ntpath)

        assert [r.absolute_path for r in index.values()] == ["D:\\b.cpp"]

    def test_existing_match_appears_once_among_missing_candidates(self) -> None:
        """An existing file appears exactly once among missing candidates."""
        coverage = _coverage(["/x", "/repo", "/y"], ["a.cpp"])
        index = resolve(coverage, lambda p: p == "/repo/a.cpp", pathmod=posixpath)
        assert len(index) == 1

    def test_later_root_wins_on_same_path(self) -> None:
        """When two classes land on one path the later root wins."""
        plain = CoverageClass("plain", "a.cpp")
        nested = CoverageClass("nested", "sub/a.cpp")
        coverage = Coverage(
            sources=(Source("/repo"), Source("/repo/sub")),
            packages=(Package("p", (plain, nested)),),
        )
        index = resolve(coverage, lambda p: True, pathmod=posixpath)
        # (/repo, nested) and (/repo/sub, plain) collide; the later root wins
        assert index["/repo/sub/a.cpp"].coverage_class.name == "plain"

    def test_empty_when_no_sources(self) -> None:
        """No sources resolves nothing."""
        assert resolve(_coverage([], ["a.cpp"]), lambda p: True, pathmod=posixpath) == {}

    def test_empty_when_no_classes(self) -> None:
        """No classes resolves nothing."""
        assert resolve(_coverage(["/repo"], []), lambda p: True, pathmod=posixpath) == {}

    def test_empty_when_nothing_exists(self) -> None:
        """No existing candidates resolves nothing."""
        assert resolve(_coverage(["/repo"], ["a.cpp"]), lambda p: False, pathmod=posixpath) == {}

    def test_idempotent(self) -> None:
        """Resolving twice gives the same mapping."""
        coverage = _coverage(["C:", "D:"], ["a.cpp", "b.cpp"])
        existing = {"C:\\a.cpp", "D:\\b.cpp", "D:\\a.cpp"}
        first = resolve(coverage, existing.__contains__, pathmod=ntpath)
        second = resolve(coverage, existing.__contains__, pathmod=ntpath)
        assert first == second

    def test_windows_keys_are_case_folded(self) -> None:
        """Windows lookups ignore case."""
        coverage = _coverage(["C:"], ["Src\\A.cpp"])
        index = resolve(coverage, lambda p: True, pathmod=ntpath)
        assert list(index) == [index_key("c:\\src\\a.cpp", ntpath)]
        assert index[index_key("C:\\SRC\\A.CPP", ntpath)].absolute_path == "C:\\Src\\A.cpp"

    def test_real_filesystem(self, tmp_path) -> None:
        """Works against the real filesystem by default."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "a.cpp").write_text("int main() {}\n")
        coverage = _coverage([str(tmp_path)], ["src/a.cpp", "src/missing.cpp"])
        index = resolve(coverage)
        assert [r.absolute_path for r in index.values()] == [str(tmp_path / "src" / "a.cpp")]
