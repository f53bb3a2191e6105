import os
from dataclasses import dataclass
from typing import Optional, Self

from dotenv import load_dotenv

from aiask.errors import ConfigError

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/o3"
DEFAULT_WEB_SEARCH_MAX_RESULTS = 5
DEFAULT_HTTP_REFERRER = "https://github.com/aiask/aiask"
DEFAULT_X_TITLE = "aiask"


@dataclass(frozen=True)
class Settings:
    api_key: str
    model: str = DEFAULT_MODEL
    system_prompt: Optional[str] = None
    web_search_max_results: int = DEFAULT_WEB_SEARCH_MAX_RESULTS
    verbose: bool = False
    base_url: str = DEFAULT_BASE_URL
    http_referrer: str = DEFAULT_HTTP_REFERRER
    x_title: str = DEFAULT_X_TITLE

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.http_referrer,
            "X-Title": self.x_title,
        }

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> Self:
        if load_env_file:
            load_dotenv()

        api_key = os.getenv("OPENROUTER_API_KEY", "")
        if not api_key:
            raise ConfigError("OPENROUTER_API_KEY environment variable not set")

        raw_max_results = os.getenv("AI_WEB_SEARCH_MAX_RESULTS")
        max_results = DEFAULT_WEB_SEARCH_MAX_RESULTS
        if raw_max_results:
            try:
                max_results = int(raw_max_results)
            except ValueError as e:
                raise ConfigError(
                    f"AI_WEB_SEARCH_MAX_RESULTS must be an integer, got {raw_max_results!r}"
                ) from e

        return cls(
            api_key=api_key,
            model=os.getenv("AI_MODEL") or DEFAULT_MODEL,
            system_prompt=os.getenv("AI_SYSTEM_PROMPT") or None,
            web_search_max_results=max_results,
            verbose=os.getenv("AI_VERBOSE", "").lower() == "true",
            base_url=os.getenv("BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            http_referrer=os.getenv("HTTP_REFERRER", DEFAULT_HTTP_REFERRER),
            x_title=os.getenv("X_TITLE", DEFAULT_X_TITLE),
        )
