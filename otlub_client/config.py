from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys

DEFAULT_BASE_URL = "https://router.snapone.studio"
TOKEN_NAMESPACE = "otlub_sdk"
TOKEN_KEY = "auth_token"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class SdkConfig:
    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout_seconds: int = 30
    debug: bool = False
    token_cache_path: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))
        if not self.token_cache_path:
            object.__setattr__(self, "token_cache_path", default_token_cache_path())

    @staticmethod
    def from_env() -> "SdkConfig":
        _load_dotenv_if_present()

        base_url = os.getenv("OTLUB_BASE_URL", DEFAULT_BASE_URL)
        api_key = os.getenv("OTLUB_API_KEY", "").strip() or None

        raw_timeout = os.getenv("OTLUB_TIMEOUT_SECONDS", "30").strip()
        try:
            timeout_seconds = int(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError("OTLUB_TIMEOUT_SECONDS must be an integer") from exc

        debug = os.getenv("OTLUB_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
        token_cache_path = os.getenv("OTLUB_TOKEN_CACHE_PATH", "").strip()

        config = SdkConfig(
            base_url=base_url,
            api_key=api_key,
            timeout_seconds=timeout_seconds,
            debug=debug,
            token_cache_path=token_cache_path,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigurationError("Missing required setting: OTLUB_BASE_URL")

        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError("OTLUB_BASE_URL must start with http:// or https://")

        if self.timeout_seconds <= 0:
            raise ConfigurationError("OTLUB_TIMEOUT_SECONDS must be greater than 0")

        if self.api_key is not None and not self.api_key.strip():
            raise ConfigurationError("OTLUB_API_KEY must not be blank when set")

        if self.api_key is not None and not self.api_key.isascii():
            raise ConfigurationError("OTLUB_API_KEY must contain only ASCII characters")


def default_token_cache_path() -> str:
    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA", str(Path.home())))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return str(base / TOKEN_NAMESPACE / TOKEN_KEY)


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("OTLUB_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key.startswith("OTLUB_") and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
