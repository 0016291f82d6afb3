from collections import namedtuple

import pytest

from assetmigrate import utils
from assetmigrate.errors import ConfigurationError, FilesystemError
from assetmigrate.utils import (
    check_free_space,
    normalized_name,
    resolve_directory,
    split_extension,
    unique_path,
    validate_layout,
)

from conftest import needs_symlinks


def test_normalized_name():
    assert normalized_name("a  b c.png") == "a__b_c.png"
    assert normalized_name("plain") == "plain"


@pytest.mark.parametrize("name,is_dir,expected", [
    ("a b.png", False, ("a b", ".png")),
    ("archive.tar.gz", False, ("archive.tar", ".gz")),
    ("README", False, ("README", "")),
    (".hidden", False, (".hidden", "")),
    ("v1.2", True, ("v1.2", "")),
])
def test_split_extension(name, is_dir, expected):
    assert split_extension(name, is_dir) == expected


def test_unique_path_free(tmp_path):
    assert unique_path(tmp_path / "a.png", False, lambda p: p.exists()) == (tmp_path / "a.png", None)


def test_unique_path_counts_taken_targets(tmp_path):
    (tmp_path / "a.png").write_text("x")
    taken = {tmp_path / "a_1.png"}
    assert unique_path(tmp_path / "a.png", False, lambda p: p.exists(), taken) == (tmp_path / "a_2.png", 2)


def test_unique_path_directory(tmp_path):
    (tmp_path / "v1.2").mkdir()
    assert unique_path(tmp_path / "v1.2", True, lambda p: p.exists()) == (tmp_path / "v1.2_1", 1)


def test_resolve_directory(tmp_path):
    assert resolve_directory(str(tmp_path)) == tmp_path.resolve()
    with pytest.raises(ConfigurationError):
        resolve_directory(str(tmp_path / "missing"))


def test_validate_layout_rejects_destination_inside_source(tmp_path):
    src = tmp_path / "image"
    src.mkdir()
    with pytest.raises(ConfigurationError):
        validate_layout([src], src / "app" / "assets" / "images")
    validate_layout([src], tmp_path / "app" / "assets" / "images")


def test_check_free_space(tmp_path, monkeypatch):
    Usage = namedtuple("Usage", "total used free")
    seen = []

    def fake_usage(path):
        seen.append(path)
        return Usage(100, 90, 10)

    monkeypatch.setattr(utils.shutil, "disk_usage", fake_usage)
    check_free_space(tmp_path / "not" / "yet", 10)
    assert seen == [tmp_path]
    with pytest.raises(FilesystemError, match="Not enough disk space"):
        check_free_space(tmp_path, 11)


def test_tree_size(tmp_path):
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / "a").write_bytes(b"123")
    (tmp_path / "b").write_bytes(b"45")
    assert utils.tree_size([tmp_path / "d", tmp_path / "b", tmp_path / "missing"]) == 5


def test_tree_size_skips_git_metadata(make_tree):
    root = make_tree("src", ["a.png", ".git/objects/pack", "sub/.git/HEAD"])
    assert utils.tree_size([root]) == len("a.png")


def test_tree_size_unreadable_directory(make_tree, unreadable):
    root = make_tree("src", ["a.png", "locked/b.png"])
    unreadable.add(root / "locked")
    with pytest.raises(FilesystemError, match="Cannot read"):
        utils.tree_size([root])


@needs_symlinks
def test_tree_size_dangling_link(make_tree):
    root = make_tree("src", ["a.png"])
    (root / "gone.png").symlink_to(root / "nowhere.png")
    with pytest.raises(FilesystemError, match="Cannot measure"):
        utils.tree_size([root])
