from dataclasses import dataclass, field
from typing import Optional
import os
from dotenv import load_dotenv

from scribebot.constants import (
    BACKEND_CLOUDFLARE,
    BACKEND_GROQ,
    CF_DEFAULT_MODEL,
    CF_ENDPOINT,
    CF_TIMEOUT,
    DEFAULT_BACKEND,
    DEFAULT_LANGUAGE,
    GROQ_BASE_URL,
    GROQ_DEFAULT_MODEL,
    GROQ_TIMEOUT,
)
from scribebot.errors import ConfigError


@dataclass(frozen=True)
class BackendConfig:
    """Immutable connection settings for the one active backend."""
    name: str
    model_id: str
    endpoint: str
    timeout: float
    credentials: str = field(repr=False)
    account_id: Optional[str] = None


@dataclass(frozen=True)
class Config:
    telegram_bot_token: str
    log_level: str
    backend: str
    language: str
    groq_api_key: Optional[str] = field(default=None, repr=False)
    groq_model: str = GROQ_DEFAULT_MODEL
    groq_base_url: str = GROQ_BASE_URL
    cf_account_id: Optional[str] = None
    cf_api_key: Optional[str] = field(default=None, repr=False)
    cf_model: str = CF_DEFAULT_MODEL

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        token = os.getenv("TELEGRAM_BOT_TOKEN")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        backend = os.getenv("TRANSCRIPTION_BACKEND", DEFAULT_BACKEND)
        language = os.getenv("TRANSCRIPTION_LANGUAGE", DEFAULT_LANGUAGE)
        groq_api_key = os.getenv("GROQ_API_KEY") or None
        groq_model = os.getenv("GROQ_MODEL") or GROQ_DEFAULT_MODEL
        groq_base_url = os.getenv("GROQ_BASE_URL") or GROQ_BASE_URL
        cf_account_id = os.getenv("CF_ACCOUNT_ID") or None
        cf_api_key = os.getenv("CF_API_KEY") or None
        cf_model = os.getenv("CF_MODEL") or CF_DEFAULT_MODEL

        return cls._validate(
            telegram_bot_token=token,
            log_level=log_level,
            backend=backend.strip().lower(),
            language=language.strip(),
            groq_api_key=groq_api_key,
            groq_model=groq_model,
            groq_base_url=groq_base_url,
            cf_account_id=cf_account_id,
            cf_api_key=cf_api_key,
            cf_model=cf_model,
        )

    @staticmethod
    def _validate(
        telegram_bot_token: Optional[str],
        log_level: str,
        backend: str,
        language: str,
        groq_api_key: Optional[str],
        groq_model: str,
        groq_base_url: str,
        cf_account_id: Optional[str],
        cf_api_key: Optional[str],
        cf_model: str,
    ) -> "Config":
        match telegram_bot_token:
            case None | "":
                raise ConfigError("TELEGRAM_BOT_TOKEN must be set in .env")
            case _:
                pass

        match (backend, groq_api_key, cf_account_id, cf_api_key):
            case (b, None, _, _) if b == BACKEND_GROQ:
                raise ConfigError("GROQ_API_KEY must be set in .env")
            case (b, _, None, _) | (b, _, _, None) if b == BACKEND_CLOUDFLARE:
                raise ConfigError("CF_ACCOUNT_ID and CF_API_KEY must be set in .env")
            case (b, _, _, _) if b not in (BACKEND_GROQ, BACKEND_CLOUDFLARE):
                raise ConfigError(
                    f"TRANSCRIPTION_BACKEND must be '{BACKEND_GROQ}' or '{BACKEND_CLOUDFLARE}'"
                )
            case _:
                pass

        return Config(
            telegram_bot_token=telegram_bot_token,
            log_level=log_level,
            backend=backend,
            language=language,
            groq_api_key=groq_api_key,
            groq_model=groq_model,
            groq_base_url=groq_base_url,
            cf_account_id=cf_account_id,
            cf_api_key=cf_api_key,
            cf_model=cf_model,
        )

    def backend_config(self) -> BackendConfig:
        """Settings for the active backend; selection happens here, once."""
        match self.backend:
            case b if b == BACKEND_CLOUDFLARE:
                return BackendConfig(
                    name=BACKEND_CLOUDFLARE,
                    model_id=self.cf_model,
                    endpoint=CF_ENDPOINT.format(
                        account_id=self.cf_account_id, model=self.cf_model
                    ),
                    timeout=CF_TIMEOUT,
                    credentials=self.cf_api_key or "",
                    account_id=self.cf_account_id,
                )
            case _:
                return BackendConfig(
                    name=BACKEND_GROQ,
                    model_id=self.groq_model,
                    endpoint=self.groq_base_url,
                    timeout=GROQ_TIMEOUT,
                    credentials=self.groq_api_key or "",
                )
