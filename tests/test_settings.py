"""
Test Settings - defaults, merge and round trip

Run with: pytest tests/test_settings.py -v
"""

import json

import pytest

from backend.settings import DEFAULT_RESULT_TEMPLATE, ProfilerSettings, load_settings, save_settings


def test_defaults():
    settings = ProfilerSettings()
    assert settings.result_template == DEFAULT_RESULT_TEMPLATE
    assert settings.file_naming_convention == "PERMA-Results-{{date}}"
    assert settings.default_save_location == "/"
    assert settings.show_ribbon_icon is True
    assert settings.create_result_file is True


def test_default_template_tokens():
    for token in ("{{date}}", "{{score_P}}", "{{score_E}}", "{{score_R}}",
                  "{{score_M}}", "{{score_A}}", "{{interpretations}}"):
        assert token in DEFAULT_RESULT_TEMPLATE


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "none.json") == ProfilerSettings()


def test_stored_values_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"resultTemplate": "Hi {{date}}", "createResultFile": False}))

    settings = load_settings(path)

    assert settings.result_template == "Hi {{date}}"
    assert settings.create_result_file is False
    assert settings.file_naming_convention == "PERMA-Results-{{date}}"


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"mySetting": "default"}))
    assert load_settings(path) == ProfilerSettings()


def test_wrong_type_rejected():
    with pytest.raises(ValueError, match="showRibbonIcon"):
        ProfilerSettings.from_json({"showRibbonIcon": "yes"})


def test_not_an_object_rejected():
    with pytest.raises(TypeError):
        ProfilerSettings.from_json(["resultTemplate"])


def test_invalid_json(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_settings(path)


def test_save_uses_camel_case_keys(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = ProfilerSettings(default_save_location="Journal/PERMA")

    save_settings(settings, path)

    stored = json.loads(path.read_text())
    assert stored["defaultSaveLocation"] == "Journal/PERMA"
    assert set(stored) == {
        "resultTemplate", "fileNamingConvention", "defaultSaveLocation",
        "showRibbonIcon", "createResultFile",
    }
    assert load_settings(path) == settings
