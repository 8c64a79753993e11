"""Tests for infrastructure.i18n.loader."""

import pytest

from infrastructure.i18n import YAMLTranslationLoader


def test_load_merges_files_of_a_locale(yaml_loader):
    catalog = yaml_loader.load("en")

    assert catalog.locale == "en"
    assert set(catalog.messages) == {"content", "greeting", "forms"}


def test_load_uses_cache(yaml_loader):
    assert yaml_loader.load("en") is yaml_loader.load("en")


def test_load_without_cache_reparses(translations_dir):
    loader = YAMLTranslationLoader(translations_dir, use_cache=False)
    assert loader.load("en") is not loader.load("en")


def test_clear_cache(yaml_loader):
    first = yaml_loader.load("en")
    yaml_loader.clear_cache()
    assert yaml_loader.load("en") is not first


def test_load_unknown_locale_raises(yaml_loader):
    with pytest.raises(FileNotFoundError):
        yaml_loader.load("fa")


def test_load_invalid_yaml_raises_value_error(translations_dir):
    (translations_dir / "broken.ar.yml").write_text("content: [unclosed", encoding="utf-8")
    loader = YAMLTranslationLoader(translations_dir)

    with pytest.raises(ValueError):
        loader.load("ar")


def test_non_mapping_file_is_skipped(translations_dir):
    (translations_dir / "list.fa.yml").write_text("- a\n- b\n", encoding="utf-8")
    (translations_dir / "ok.fa.yml").write_text("content:\n  not_found: x\n", encoding="utf-8")
    loader = YAMLTranslationLoader(translations_dir)

    assert loader.load("fa").messages == {"content": {"not_found": "x"}}


def test_load_all_returns_every_locale(yaml_loader):
    assert sorted(yaml_loader.load_all()) == ["en", "ur"]


def test_missing_directory_raises(tmp_path):
    with pytest.raises(ValueError):
        YAMLTranslationLoader(tmp_path / "missing")


def test_empty_directory_load_all_raises(tmp_path):
    with pytest.raises(ValueError):
        YAMLTranslationLoader(tmp_path).load_all()
