"""Fixtures for i18n tests: a throwaway catalog directory."""

import pytest
import yaml

from infrastructure.i18n import Translator, YAMLTranslationLoader


@pytest.fixture
def translations_dir(tmp_path):
    """Directory holding:
    - messages.en.yml
    - messages.ur.yml (partial)
    - forms.en.yml
    """
    (tmp_path / "messages.en.yml").write_text(
        yaml.dump(
            {
                "content": {
                    "not_found": "Not Found",
                    "document_not_found": "No document found for {id}",
                },
                "greeting": {"hello": "Hello {{name}}"},
            }
        ),
        encoding="utf-8",
    )
    (tmp_path / "messages.ur.yml").write_text(
        yaml.dump({"content": {"not_found": "نہیں ملا"}}, allow_unicode=True),
        encoding="utf-8",
    )
    (tmp_path / "forms.en.yml").write_text(
        yaml.dump({"forms": {"required": "{label} is required"}}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def yaml_loader(translations_dir):
    return YAMLTranslationLoader(translations_dir)


@pytest.fixture
def loaded_translator(yaml_loader):
    translator = Translator(yaml_loader, fallback_locale="en")
    translator.load_all()
    return translator
