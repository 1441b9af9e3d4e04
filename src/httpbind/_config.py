import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ._utils.constants import (
    DOTENV_FILE,
    ENV_BASE_URL,
    ENV_MAX_RETRIES,
    ENV_TIMEOUT,
)
from .models.errors import BaseUrlMissingError


class Config(BaseModel):
    base_url: str
    timeout: float = 30.0
    max_retries: int = Field(default=3, ge=0)
    default_headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "Config":
        """Build a config from ``HTTPBIND_*`` environment variables.

        A ``.env`` file is loaded first; variables already set in the
        environment take precedence over it. Keyword overrides win over both.

        Raises:
            BaseUrlMissingError: If no base URL is configured.
        """
        load_dotenv(dotenv_path=dotenv_path or os.path.join(os.getcwd(), DOTENV_FILE))

        values: dict = {}
        base_url = os.getenv(ENV_BASE_URL)
        if base_url:
            values["base_url"] = base_url
        timeout = os.getenv(ENV_TIMEOUT)
        if timeout:
            values["timeout"] = timeout
        max_retries = os.getenv(ENV_MAX_RETRIES)
        if max_retries:
            values["max_retries"] = max_retries
        values.update(overrides)

        if not values.get("base_url"):
            raise BaseUrlMissingError()
        return cls.model_validate(values)
