"""
Configuration Loader

Loads connection settings from the environment (and a .env file) and
index schemas from JSON files.
"""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import load_dotenv

from elasticsearch_doc_lib.exceptions import ConfigurationError
from elasticsearch_doc_lib.models import ConnectionConfig

logger = logging.getLogger(__name__)

ENV_HOST = "ES_HOST"
ENV_PORT = "ES_PORT"
ENV_SCHEME = "ES_SCHEME"
ENV_USERNAME = "ES_USERNAME"
ENV_PASSWORD = "ES_PASSWORD"
ENV_INDEX = "ES_INDEX"
ENV_LOG_LEVEL = "LOG_LEVEL"


class ConfigLoader:
    """
    Loads ConnectionConfig from environment variables.

    Variables: ES_HOST, ES_PORT, ES_SCHEME, ES_USERNAME, ES_PASSWORD,
    ES_INDEX. Values from a .env file are loaded first and never
    override variables already set in the process environment.
    """

    def __init__(
        self,
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize configuration loader.

        Args:
            env_file: Path to a .env file. If None, python-dotenv searches
                      for one starting from the current directory.
            environ: Mapping to read instead of os.environ (no .env loading)
        """
        self.env_file = env_file
        if environ is None:
            load_dotenv(dotenv_path=env_file)
            self.environ: Mapping[str, str] = os.environ
        else:
            self.environ = environ

    def _get(self, name: str) -> Optional[str]:
        value = self.environ.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def load_connection(self) -> ConnectionConfig:
        """
        Build a ConnectionConfig from the environment.

        Returns:
            ConnectionConfig with defaults for unset variables

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        port_text = self._get(ENV_PORT)
        try:
            port = int(port_text) if port_text is not None else 9200
        except ValueError:
            raise ConfigurationError(f"{ENV_PORT} must be an integer, got '{port_text}'")

        config = ConnectionConfig(
            host=self._get(ENV_HOST) or "localhost",
            port=port,
            scheme=(self._get(ENV_SCHEME) or "http").lower(),
            username=self._get(ENV_USERNAME),
            password=self._get(ENV_PASSWORD),
            default_index=self._get(ENV_INDEX),
        )
        logger.info(f"Loaded connection configuration for {config.url}")
        return config

    def log_level(self) -> str:
        """Logging level from LOG_LEVEL (default: INFO)."""
        return (self._get(ENV_LOG_LEVEL) or "INFO").upper()

    @staticmethod
    def load_schema(path: Union[str, Path]) -> str:
        """
        Read an index schema file.

        The text is returned unchanged so it can be sent verbatim; it is
        only checked to be a JSON object.

        Args:
            path: Path to the JSON schema file

        Returns:
            Schema file contents

        Raises:
            ConfigurationError: If the file is missing or not a JSON object
        """
        schema_file = Path(path)
        if not schema_file.exists():
            raise ConfigurationError(f"Schema file not found: {schema_file}")

        text = schema_file.read_text(encoding="utf-8")
        try:
            parsed = json.loads(text)
        except ValueError as e:
            raise ConfigurationError(f"Invalid JSON in schema file {schema_file}: {e}")

        if not isinstance(parsed, dict):
            raise ConfigurationError(f"Schema file {schema_file} must contain a JSON object")

        logger.debug(f"Loaded index schema from {schema_file}")
        return text


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
