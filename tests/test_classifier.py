import json

import pytest

from assetmigrate.classifier import AssetRules, classify
from assetmigrate.errors import ConfigurationError
from assetmigrate.models import AssetKind, PathKind


def test_classify_file_dir_and_missing(tmp_path):
    f = tmp_path / "Photo.PNG"
    f.write_bytes(b"x")
    info = classify(f)
    assert info.kind is PathKind.FILE
    assert info.extension == ".png"

    assert classify(tmp_path).kind is PathKind.DIRECTORY
    assert classify(tmp_path).extension is None

    missing = classify(tmp_path / "nope.mp3")
    assert missing.kind is PathKind.MISSING
    assert missing.extension is None


def test_classify_file_without_extension(tmp_path):
    f = tmp_path / "README"
    f.write_text("hi")
    assert classify(f).extension is None


def test_default_rules():
    rules = AssetRules()
    assert rules.kind_for(".png") is AssetKind.IMAGE
    assert rules.kind_for(".JPEG") is AssetKind.IMAGE
    assert rules.kind_for(".ogg") is AssetKind.AUDIO
    assert rules.kind_for(".txt") is None
    assert rules.kind_for(None) is None
    assert rules.image_dirs == ("image", "images")
    assert rules.audio_name == "shot"


def test_user_rules_override(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({
        "image_extensions": ["webp", ".GIF"],
        "audio_hints": ["BANG"],
        "audio_name": "disparo",
        "comment": "ignored",
    }), encoding="utf-8")
    rules = AssetRules(path)
    assert rules.image_extensions == {".webp", ".gif"}
    assert rules.kind_for(".png") is None
    assert rules.audio_extensions == {".mp3", ".wav", ".ogg"}
    assert rules.audio_hints == ("bang",)
    assert rules.audio_name == "disparo"


def test_hint_matching_is_case_insensitive_on_basename(tmp_path):
    rules = AssetRules()
    assert rules.is_hinted(tmp_path / "sfx" / "Big_FIRE.wav")
    assert not rules.is_hinted(tmp_path / "shots" / "boom.wav")


def test_missing_rules_file(tmp_path):
    with pytest.raises(ConfigurationError):
        AssetRules(tmp_path / "absent.json")


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"image_dirs": "image"}', '{"audio_name": "a/b"}'])
def test_bad_rules_file(tmp_path, content):
    path = tmp_path / "rules.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        AssetRules(path)
