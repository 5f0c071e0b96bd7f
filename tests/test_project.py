from pathlib import Path

import pytest

from cargo_wrap.core.errors import (
    CargoIOError,
    ManifestFormatError,
    ManifestReadError,
)
from cargo_wrap.core.project import ProjectSettings


def test_defaults(tmp_path):
    """A fresh ProjectSettings has every optional field empty."""
    settings = ProjectSettings(tmp_path / "missing")
    assert settings.project_path == tmp_path / "missing"
    assert settings.cargo_toml_path == tmp_path / "missing" / "Cargo.toml"
    assert settings.release is False
    assert settings.no_default_features is False
    assert settings.is_lib is False
    assert settings.features is None
    assert settings.output_path is None
    assert settings.compilation_target is None
    assert settings.target is None


def test_constructor_arguments(tmp_path):
    settings = ProjectSettings(
        str(tmp_path), str(tmp_path / "out"), "aarch64-unknown-linux-gnu", True
    )
    assert settings.project_path == tmp_path
    assert settings.output_path == tmp_path / "out"
    assert settings.compilation_target == "aarch64-unknown-linux-gnu"
    assert settings.is_lib is True


def test_manifest_path_is_read_only(tmp_path):
    settings = ProjectSettings(tmp_path)
    with pytest.raises(AttributeError):
        settings.cargo_toml_path = Path("/elsewhere/Cargo.toml")


def test_set_release_is_idempotent(settings):
    settings.set_release()
    settings.set_release()
    assert settings.release is True


def test_add_feature_appends_without_dedup(settings):
    settings.add_feature("serde")
    settings.add_feature("simd")
    settings.add_feature("serde")
    assert settings.features == ("serde", "simd", "serde")


def test_features_view_is_a_copy(settings):
    settings.add_feature("serde")
    view = settings.features
    settings.add_feature("simd")
    assert view == ("serde",)


def test_explicit_empty_feature_list(tmp_path):
    settings = ProjectSettings(tmp_path, features=[])
    assert settings.features == ()


def test_setters_for_no_default_features_and_target(settings):
    settings.set_no_default_features()
    settings.set_build_target("demo-cli")
    assert settings.no_default_features is True
    assert settings.target == "demo-cli"


def test_get_features_in_declared_order(settings):
    assert settings.get_features() == ["default", "std", "serde", "simd"]


def test_get_features_without_table(tmp_path):
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "bare"\n', encoding="utf-8")
    assert ProjectSettings(tmp_path).get_features() == []


def test_get_features_rereads_manifest(project_dir, settings):
    assert "extra" not in settings.get_features()
    manifest = project_dir / "Cargo.toml"
    manifest.write_text(
        manifest.read_text(encoding="utf-8") + "extra = []\n", encoding="utf-8"
    )
    assert settings.get_features()[-1] == "extra"


def test_get_features_missing_manifest(tmp_path):
    settings = ProjectSettings(tmp_path / "nowhere")
    with pytest.raises(ManifestReadError) as exc_info:
        settings.get_features()
    assert isinstance(exc_info.value, CargoIOError)
    assert isinstance(exc_info.value.cause, FileNotFoundError)
    assert exc_info.value.path == tmp_path / "nowhere" / "Cargo.toml"


def test_get_features_invalid_toml(tmp_path):
    (tmp_path / "Cargo.toml").write_text("[package\nname = ", encoding="utf-8")
    with pytest.raises(ManifestFormatError):
        ProjectSettings(tmp_path).get_features()


def test_get_features_entry_that_is_not_a_table(tmp_path):
    (tmp_path / "Cargo.toml").write_text('features = "serde"\n', encoding="utf-8")
    assert ProjectSettings(tmp_path).get_features() == []


def test_get_features_invalid_utf8(tmp_path):
    (tmp_path / "Cargo.toml").write_bytes(b"\xff\xfe")
    with pytest.raises(ManifestFormatError) as exc_info:
        ProjectSettings(tmp_path).get_features()
    assert not isinstance(exc_info.value, CargoIOError)
    assert isinstance(exc_info.value.cause, UnicodeDecodeError)


def test_repr_mentions_key_fields(settings):
    settings.set_release()
    text = repr(settings)
    assert "ProjectSettings(" in text
    assert "release=True" in text
