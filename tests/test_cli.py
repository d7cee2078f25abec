import logging

import pytest

from conftest import FakeTranslator
from i18n_sync import orchestrator
from i18n_sync.cli import build_parser, main


@pytest.fixture
def api_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_URL", "https://api.example.com")
    monkeypatch.setenv("OPENAI_API_KEY", "secret")


def test_init_then_status_is_clean(project):
    project.write("en-GB", "main.json", {"hello": "Hello"})

    assert main(["init"]) == 0
    assert (project.root / "i18n-sync-state.json").is_file()
    assert main(["status"]) == 0


def test_status_without_state_fails(project, caplog):
    with caplog.at_level(logging.ERROR, logger="i18n-sync"):
        assert main(["status"]) == 1

    assert "Run `i18n-sync init` first." in caplog.text


def test_sync_reports_stale_keys(project):
    project.write("en-GB", "main.json", {"hello": "Hello"})
    project.write("es-ES", "main.json", {"hello": "Hola"})
    main(["--state", project.state_path, "init"])
    project.write("en-GB", "main.json", {"hello": "Hello", "bye": "Bye"})

    assert main(["--state", project.state_path, "sync"]) == 0
    assert (project.translations / "translation.ts").is_file()


def test_check_is_a_deprecated_alias(project, caplog):
    main(["init"])

    with caplog.at_level(logging.WARNING, logger="i18n-sync"):
        assert main(["check"]) == 0

    assert "`check` is deprecated, use `status` instead" in caplog.text


def test_translate_requires_api_settings(project, monkeypatch):
    monkeypatch.delenv("OPENAI_API_URL", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    main(["init"])

    assert main(["translate"]) == 1


def test_translate_fills_missing_keys(project, monkeypatch, api_env):
    project.write("en-GB", "main.json", {"hello": "Hello"})
    (project.translations / "es-ES").mkdir()
    main(["init"])
    translator = FakeTranslator(responses={"es-ES": {"hello": "Hola"}})
    monkeypatch.setattr(orchestrator, "OpenAITranslator", lambda cfg, logger=None: translator)

    assert main(["translate", "--tone", "informal"]) == 0

    assert project.read("es-ES", "main.json") == {"hello": "Hola"}
    assert translator.calls[0]["tone"] == "informal"
    assert main(["status"]) == 0


def test_translate_exits_nonzero_when_a_chunk_fails(project, monkeypatch, api_env):
    project.write("en-GB", "main.json", {"hello": "Hello"})
    (project.translations / "es-ES").mkdir()
    main(["init"])
    monkeypatch.setattr(orchestrator, "OpenAITranslator", lambda cfg, logger=None: FakeTranslator(fail_on=[0]))

    assert main(["translate"]) == 1


def test_project_config_file_is_honoured(project):
    (project.root / "i18n-sync.yaml").write_text(
        "translationsPath: locales\nbaseLocale: de-DE\nstatePath: .i18n/state.json\n", encoding="utf-8"
    )

    assert main(["init"]) == 0

    state = (project.root / ".i18n" / "state.json").read_text(encoding="utf-8")
    assert '"baseLocale": "de-DE"' in state
    assert '"translationsPath": "locales"' in state
    assert (project.root / "locales" / "de-DE").is_dir()


def test_generate_writes_keys_to_output_folder(project):
    project.write("en-GB", "main.json", {"hello": "Hello"})
    main(["init"])

    assert main(["generate", "-o", "src"]) == 0
    assert (project.root / "src" / "translation.ts").is_file()


def test_translate_options_are_parsed():
    args = build_parser().parse_args(["translate", "-u", "https://x", "-k", "key", "--update-all", "--chunk-size", "20"])

    assert (args.api_url, args.api_key, args.update_all, args.chunk_size) == ("https://x", "key", True, 20)
    assert args.max_retries == 3


@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_chunk_size_is_rejected(value, capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["translate", "--chunk-size", value])

    assert "must be a positive integer" in capsys.readouterr().err
