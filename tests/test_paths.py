import pytest

from report_viewer.utils.paths import to_slash


@pytest.mark.parametrize(
    "path, expected",
    [
        ("src\\main\\Foo.java", "src/main/Foo.java"),
        ("src/main/Foo.java", "src/main/Foo.java"),
        ("mixed\\dir/Foo.java", "mixed/dir/Foo.java"),
        ("", ""),
    ],
)
def test_backslashes_become_forward_slashes(path, expected):
    assert to_slash(path) == expected


def test_extended_length_paths_are_untouched():
    path = "\\\\?\\C:\\report\\Foo.java"

    assert to_slash(path) == path
