import pytest

from assetmigrate.errors import ConfigurationError, FilesystemError
from assetmigrate.models import AssetKind
from assetmigrate.scanner import AssetLocator, SourceTree


def test_missing_source_root(tmp_path):
    with pytest.raises(ConfigurationError):
        SourceTree(tmp_path / "nowhere")


def test_conventional_directories_singular_then_plural(make_tree):
    root = make_tree("src", ["images/b.png", "image/a.png", "other/c.png"])
    dirs = AssetLocator(SourceTree(root)).locate_image_directories()
    assert dirs == [root / "image", root / "images"]


def test_conventional_directory_used_even_without_matching_files(make_tree):
    root = make_tree("src", ["image/readme.txt", "art/c.png"])
    assert AssetLocator(SourceTree(root)).locate_image_directories() == [root / "image"]


def test_fallback_picks_lexicographically_first_parent(make_tree):
    root = make_tree("src", [
        "zeta/one.JPG",
        "assets/icons/two.svg",
        "assets/icons/three.png",
        "docs/notes.txt",
    ])
    dirs = AssetLocator(SourceTree(root)).locate_image_directories()
    assert dirs == [root / "assets" / "icons"]


def test_no_images_is_empty_not_an_error(make_tree):
    root = make_tree("src", ["docs/notes.txt", "sound/a.mp3"])
    assert AssetLocator(SourceTree(root)).locate_image_directories() == []


def test_audio_files_sorted_by_full_path(make_tree):
    root = make_tree("src", ["z/last.wav", "a/first.OGG", "m/mid.mp3", "m/skip.flac"])
    found = AssetLocator(SourceTree(root)).locate_audio_files()
    assert [c.path for c in found] == [root / "a/first.OGG", root / "m/mid.mp3", root / "z/last.wav"]
    assert all(c.kind is AssetKind.AUDIO for c in found)
    assert found[0].extension == ".OGG"


def test_git_metadata_is_not_scanned(make_tree):
    root = make_tree("src", [".git/objects/pack.png", ".git/hooks/ping.wav", "x/y.txt"])
    locator = AssetLocator(SourceTree(root))
    assert locator.locate_image_directories() == []
    assert locator.locate_audio_files() == []


def test_files_enumerated_once(make_tree):
    root = make_tree("src", ["a/one.mp3"])
    tree = SourceTree(root)
    assert tree.files() == [root / "a/one.mp3"]
    (root / "a/two.mp3").write_text("late")
    assert tree.files() == [root / "a/one.mp3"]


def test_unreadable_subdirectory_is_fatal(make_tree, unreadable):
    root = make_tree("src", ["a/one.mp3", "locked/two.mp3"])
    unreadable.add(root / "locked")
    with pytest.raises(FilesystemError, match="Cannot read"):
        SourceTree(root).files()
