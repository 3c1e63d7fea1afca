"""Client configuration: endpoint, API version and auth token.

Explicit values win over environment variables. Resolution happens once;
the resulting ClientConfig is immutable and handed to the Client.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from genesisdb.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_API_URL = "GENESISDB_API_URL"
ENV_API_VERSION = "GENESISDB_API_VERSION"
ENV_AUTH_TOKEN = "GENESISDB_AUTH_TOKEN"


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_url: str
    api_version: str
    auth_token: str

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def base_url(self) -> str:
        """Root of all endpoints, e.g. ``http://localhost:8080/api/v1``."""
        return f"{self.api_url}/api/{self.api_version}"

    @classmethod
    def resolve(
        cls,
        api_url: str | None = None,
        api_version: str | None = None,
        auth_token: str | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> "ClientConfig":
        """Fill every unset value from the environment.

        Raises ConfigurationError naming the environment variables that would
        have been needed for the values still missing.
        """
        env = os.environ if environ is None else environ
        values = {
            ENV_API_URL: api_url or env.get(ENV_API_URL, ""),
            ENV_API_VERSION: api_version or env.get(ENV_API_VERSION, ""),
            ENV_AUTH_TOKEN: auth_token or env.get(ENV_AUTH_TOKEN, ""),
        }
        missing = [name for name, value in values.items() if not value]
        if missing:
            logger.error("Missing required environment variables: %s", ", ".join(missing))
            raise ConfigurationError(missing)
        return cls(
            api_url=values[ENV_API_URL],
            api_version=values[ENV_API_VERSION],
            auth_token=values[ENV_AUTH_TOKEN],
        )

    @classmethod
    def from_dotenv(cls, path: str | Path | None = None) -> "ClientConfig":
        """Load a .env file into the environment, then resolve from it.

        Variables already set in the environment are not overridden.
        """
        if load_dotenv(path):
            logger.debug("Loaded environment from %s", path or ".env")
        return cls.resolve()
