import json

import pytest

from i18n_sync.config import ProjectConfig, TranslateConfig, load_context, load_project_config, resolve_api_settings
from i18n_sync.errors import ContextFileError, MissingConfigError, TranslationFileError
from i18n_sync.fileio import list_json_files, read_json, write_json
from i18n_sync.formatting import FormatOptions, format_text, resolve_format_options


class TestProjectConfig:
    def test_defaults_without_a_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_project_config() == ProjectConfig()

    def test_yaml_keys_are_mapped(self, tmp_path):
        path = tmp_path / "i18n-sync.yaml"
        path.write_text("translationsPath: locales\nbaseLocale: en-US\ntone: friendly\nunknown: 1\n", encoding="utf-8")

        cfg = load_project_config(str(path))

        assert cfg.translations_path == "locales"
        assert cfg.base_locale == "en-US"
        assert cfg.tone == "friendly"
        assert cfg.state_path == "i18n-sync-state.json"

    def test_explicit_missing_file_is_an_error(self, tmp_path):
        with pytest.raises(MissingConfigError):
            load_project_config(str(tmp_path / "missing.yaml"))


def test_translate_config_rejects_non_positive_chunk_size():
    with pytest.raises(ValueError, match="chunk_size"):
        TranslateConfig(api_url="https://x", api_key="k", chunk_size=0)


class TestApiSettings:
    def test_flags_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_URL", "https://env")
        monkeypatch.setenv("OPENAI_API_KEY", "env-key")

        assert resolve_api_settings("https://flag", None) == ("https://flag", "env-key")

    def test_missing_values_are_named(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_URL", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(MissingConfigError, match="OPENAI_API_KEY"):
            resolve_api_settings("https://flag", None)


def test_load_context(tmp_path):
    path = tmp_path / "context.txt"
    path.write_text("  A banking app.\n", encoding="utf-8")

    assert load_context(str(path)) == "A banking app."
    assert load_context(None) == ""
    with pytest.raises(ContextFileError, match="Error reading context file"):
        load_context(str(tmp_path / "missing.txt"))


class TestFormatting:
    def test_prettierrc_is_found_in_a_directory(self, tmp_path):
        (tmp_path / ".prettierrc").write_text(json.dumps({"tabWidth": 4}), encoding="utf-8")

        assert resolve_format_options(str(tmp_path)) == FormatOptions(tab_width=4, use_tabs=False)

    def test_yaml_rc_file(self, tmp_path):
        path = tmp_path / ".prettierrc.yml"
        path.write_text("useTabs: true\n", encoding="utf-8")

        assert resolve_format_options(str(path)).indent == "\t"

    def test_defaults_without_rc(self, tmp_path):
        assert resolve_format_options(str(tmp_path)) == FormatOptions()

    def test_json_output_ends_with_newline(self):
        assert format_text('{"a":{"b":"é"}}', FormatOptions(tab_width=4)) == '{\n    "a": {\n        "b": "é"\n    }\n}\n'

    def test_unknown_parser(self):
        with pytest.raises(ValueError):
            format_text("x", parser="css")


class TestTranslationFiles:
    def test_write_then_read(self, tmp_path):
        path = str(tmp_path / "es-ES" / "main.json")
        write_json(path, {"hello": "Hola"})

        assert read_json(path) == {"hello": "Hola"}
        assert list_json_files(str(tmp_path / "es-ES")) == ["main.json"]

    @pytest.mark.parametrize("content", ["{broken", "[]", '{"a": 1}', '{"a": {"b": null}}'])
    def test_malformed_files_raise_with_path(self, tmp_path, content):
        path = tmp_path / "main.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(TranslationFileError) as exc:
            read_json(str(path))
        assert exc.value.path == str(path)

    def test_non_utf8_file_raises_with_path(self, tmp_path):
        path = tmp_path / "main.json"
        path.write_bytes(b'{"a": "\xff\xfe"}')

        with pytest.raises(TranslationFileError, match="not valid UTF-8") as exc:
            read_json(str(path))
        assert exc.value.path == str(path)

    def test_missing_directory_is_created(self, tmp_path):
        path = tmp_path / "translations" / "en-GB"

        assert list_json_files(str(path)) == []
        assert path.is_dir()
