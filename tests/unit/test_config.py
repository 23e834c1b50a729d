"""Unit tests for AgentConfig and .env loading."""

import codecs
from pathlib import Path

import pytest
import pytest_check as check
from pydantic import ValidationError

from brandchat.agent.config import AgentConfig
from brandchat.env import clean_value, decode_env_bytes, load_environment, read_env_file

_CONFIG_VARS = (
    "LLM_PROVIDER",
    "LLM_MODEL",
    "LLM_TIMEOUT",
    "LLM_API_KEY",
    "LLM_BASE_URL",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_API_KEY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables inherited from the shell."""
    for name in _CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)


class TestAgentConfig:
    """Tests for AgentConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = AgentConfig(
            provider="openai",
            api_key="sk-test-key-12345",
            base_url="http://localhost:11434/v1",
            model_name="gpt-4o",
            temperature=0.5,
            max_tokens=2048,
            timeout=30,
        )

        check.equal(config.provider, "openai")
        check.equal(config.api_key, "sk-test-key-12345")
        check.equal(config.base_url, "http://localhost:11434/v1")
        check.equal(config.model_name, "gpt-4o")
        check.equal(config.temperature, 0.5)
        check.equal(config.max_tokens, 2048)
        check.equal(config.timeout, 30.0)

    def test_config_with_default_values(self) -> None:
        """Defaults target Gemini with no credential."""
        config = AgentConfig()

        check.equal(config.provider, "gemini")
        check.equal(config.model_name, "gemini-2.0-flash")
        check.equal(config.temperature, 0.7)
        check.equal(config.max_tokens, 1024)
        check.equal(config.timeout, 60.0)
        check.is_false(config.has_credentials)

    def test_missing_api_key_is_allowed(self) -> None:
        """An empty key is valid; the relay reports it per request."""
        config = AgentConfig(api_key="   ")

        check.equal(config.api_key, "")
        check.is_false(config.has_credentials)

    def test_config_strips_api_key_whitespace(self) -> None:
        """Config strips leading/trailing whitespace from API key."""
        config = AgentConfig(api_key="  gm-test-key  ")

        check.equal(config.api_key, "gm-test-key")
        check.is_true(config.has_credentials)

    def test_gemini_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """GEMINI_API_KEY is preferred over GOOGLE_API_KEY."""
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert AgentConfig().api_key == "gemini-key"

    def test_google_key_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """GOOGLE_API_KEY is used when GEMINI_API_KEY is absent."""
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert AgentConfig().api_key == "google-key"

    def test_openai_provider_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LLM_PROVIDER=openai switches key variable and default model."""
        monkeypatch.setenv("LLM_PROVIDER", "OpenAI")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")

        config = AgentConfig()

        check.equal(config.provider, "openai")
        check.equal(config.api_key, "sk-env")
        check.equal(config.model_name, "gpt-4o-mini")

    def test_timeout_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LLM_TIMEOUT is parsed and validated."""
        monkeypatch.setenv("LLM_TIMEOUT", "12.5")

        assert AgentConfig().timeout == 12.5

    def test_invalid_timeout_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A non-numeric or non-positive LLM_TIMEOUT is a validation error."""
        monkeypatch.setenv("LLM_TIMEOUT", "soon")
        with pytest.raises(ValidationError):
            AgentConfig()

        with pytest.raises(ValidationError):
            AgentConfig(timeout=0)

    def test_unknown_provider_rejected(self) -> None:
        """Only gemini and openai are supported."""
        with pytest.raises(ValidationError):
            AgentConfig(provider="anthropic")

    def test_temperature_bounds(self) -> None:
        """Temperature must stay within 0.0-2.0."""
        with pytest.raises(ValidationError) as exc_info:
            AgentConfig(temperature=2.5)

        assert "temperature" in str(exc_info.value).lower()

    def test_max_tokens_bounds(self) -> None:
        """max_tokens must stay within 1-128000."""
        with pytest.raises(ValidationError) as exc_info:
            AgentConfig(max_tokens=0)

        assert "max_tokens" in str(exc_info.value).lower()


class TestEnvDecoding:
    """Tests for .env byte decoding and value cleanup."""

    def test_utf8(self) -> None:
        """Plain UTF-8 passes through."""
        assert decode_env_bytes(b"KEY=value\n") == "KEY=value\n"

    def test_utf8_bom(self) -> None:
        """A UTF-8 BOM is dropped."""
        assert decode_env_bytes(codecs.BOM_UTF8 + b"KEY=value") == "KEY=value"

    def test_utf16_le(self) -> None:
        """UTF-16 LE with BOM, as saved by Notepad."""
        raw = codecs.BOM_UTF16_LE + "KEY=välue".encode("utf-16-le")

        assert decode_env_bytes(raw) == "KEY=välue"

    def test_utf16_be(self) -> None:
        """UTF-16 BE with BOM."""
        raw = codecs.BOM_UTF16_BE + "KEY=value".encode("utf-16-be")

        assert decode_env_bytes(raw) == "KEY=value"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  value  ", "value"),
            ('"quoted"', "quoted"),
            ("'single'", "single"),
            ("\ufeffbom", "bom"),
            ("nu\x00ll", "null"),
            ('"mismatched\'', '"mismatched\''),
            ('"', '"'),
            (None, ""),
        ],
    )
    def test_clean_value(self, raw: str | None, expected: str) -> None:
        """Values lose BOMs, NULs, whitespace and one pair of quotes."""
        assert clean_value(raw) == expected


class TestLoadEnvironment:
    """Tests for startup environment loading."""

    def test_reads_utf16_file(self, tmp_path: Path) -> None:
        """Values from a UTF-16 file are parsed and cleaned."""
        env_file = tmp_path / ".env"
        text = 'GEMINI_API_KEY="abc123"\nPORT=4000\n'
        env_file.write_bytes(codecs.BOM_UTF16_LE + text.encode("utf-16-le"))

        assert read_env_file(env_file) == {"GEMINI_API_KEY": "abc123", "PORT": "4000"}

    def test_existing_variables_take_precedence(self, tmp_path: Path) -> None:
        """A variable already in the environment is not overridden."""
        env_file = tmp_path / ".env"
        env_file.write_text("GEMINI_API_KEY=from-file\nPORT=4000\n", encoding="utf-8")
        environ = {"GEMINI_API_KEY": "from-env"}

        applied = load_environment(env_file, environ)

        check.equal(environ["GEMINI_API_KEY"], "from-env")
        check.equal(environ["PORT"], "4000")
        check.equal(applied, {"PORT": "4000"})

    def test_google_key_mapped_to_gemini(self, tmp_path: Path) -> None:
        """GOOGLE_API_KEY fills in a missing GEMINI_API_KEY."""
        env_file = tmp_path / ".env"
        env_file.write_text("GOOGLE_API_KEY=google-key\n", encoding="utf-8")
        environ: dict[str, str] = {}

        load_environment(env_file, environ)

        assert environ["GEMINI_API_KEY"] == "google-key"

    def test_missing_file_is_not_an_error(self, tmp_path: Path) -> None:
        """Without a file nothing is applied and startup continues."""
        environ: dict[str, str] = {}

        applied = load_environment(tmp_path / "absent.env", environ)

        check.equal(applied, {})
        check.equal(environ, {})

    def test_env_file_override(self, tmp_path: Path) -> None:
        """ENV_FILE points loading at another file."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("PORT=5000\n", encoding="utf-8")
        environ = {"ENV_FILE": str(env_file)}

        load_environment(environ=environ)

        assert environ["PORT"] == "5000"
