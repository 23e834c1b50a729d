"""One-time environment loading from the project's .env file.

Editors on Windows often save .env files as UTF-16, so the raw bytes are
decoded by sniffing the byte order mark before python-dotenv parses them.
Variables already present in the process environment always win over
values from the file.
"""

import codecs
import io
import logging
import os
from collections.abc import MutableMapping
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_ENV_PATH = PROJECT_ROOT / ".env"

_QUOTES = ('"', "'")


def resolve_env_path(environ: MutableMapping[str, str] | None = None) -> Path:
    """Return the .env path, honouring an ENV_FILE override."""
    env = os.environ if environ is None else environ
    override = env.get("ENV_FILE")
    return Path(override) if override else DEFAULT_ENV_PATH


def decode_env_bytes(raw: bytes) -> str:
    """Decode .env bytes as UTF-16 (LE or BE, by BOM) or UTF-8."""
    if raw.startswith(codecs.BOM_UTF16_LE):
        return raw[len(codecs.BOM_UTF16_LE) :].decode("utf-16-le", errors="replace")
    if raw.startswith(codecs.BOM_UTF16_BE):
        return raw[len(codecs.BOM_UTF16_BE) :].decode("utf-16-be", errors="replace")
    return raw.decode("utf-8-sig", errors="replace")


def clean_value(value: str | None) -> str:
    """Strip BOMs, NUL characters, whitespace and one pair of wrapping quotes."""
    cleaned = (value or "").replace("\ufeff", "").replace("\x00", "").strip()
    if len(cleaned) >= 2 and cleaned[0] in _QUOTES and cleaned[-1] == cleaned[0]:
        cleaned = cleaned[1:-1]
    return cleaned


def read_env_file(path: Path) -> dict[str, str]:
    """Parse an .env file of any supported encoding into cleaned values."""
    text = decode_env_bytes(path.read_bytes())
    values = dotenv_values(stream=io.StringIO(text))
    return {key: clean_value(value) for key, value in values.items()}


def load_environment(
    path: Path | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> dict[str, str]:
    """Apply .env values to the environment without overriding existing ones.

    Also maps GOOGLE_API_KEY onto GEMINI_API_KEY when only the former is set.

    Args:
        path: Explicit .env path. Defaults to ENV_FILE or <root>/.env.
        environ: Mapping to update. Defaults to os.environ.

    Returns:
        The variables that were taken from the file.
    """
    env = os.environ if environ is None else environ
    env_path = path or resolve_env_path(env)

    applied: dict[str, str] = {}
    if env_path.is_file():
        try:
            file_values = read_env_file(env_path)
        except OSError as e:
            logger.warning(f"Failed to load {env_path}: {e}")
            file_values = {}

        for key, value in file_values.items():
            if key in env:
                continue
            env[key] = value
            applied[key] = value

    if not env.get("GEMINI_API_KEY") and env.get("GOOGLE_API_KEY"):
        env["GEMINI_API_KEY"] = env["GOOGLE_API_KEY"]

    if not env.get("GEMINI_API_KEY") and not env.get("OPENAI_API_KEY"):
        logger.warning(f"GEMINI_API_KEY not found in environment. Create {env_path}.")

    return applied
