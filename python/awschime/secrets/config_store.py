"""
awschime/secrets/config_store.py

A JSON key-value file holding the CLI's AWS credentials.

The store is an ordinary object: the CLI builds one at startup, loads it,
passes it to whatever needs it, and saves it after a mutation. Nothing here is
module-global.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import aiofiles

from awschime.api.errors import ConfigurationError, ConfigurationMissingError
from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.config import CONFIG_KEY_ALIASES, CLIConfig
from awschime.models.validator import decode_json

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AWSCHIME_CONFIG"


def default_config_path() -> str:
    """$AWSCHIME_CONFIG, else $XDG_CONFIG_HOME/awschime/config.json, else ~/.config/..."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return override
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    return os.path.join(base, "awschime", "config.json")


def normalize_key(key: str) -> str:
    """Map snake_case spellings onto the camelCase keys stored on disk."""
    return CONFIG_KEY_ALIASES.get(key, key)


class ConfigStore:
    """File-backed credential store.

    Keys are stored as ``accessKeyId``, ``secretAccessKey`` and
    ``sessionToken``; other keys are preserved untouched.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or default_config_path()
        self._data: Dict[str, Any] = {}

    async def load(self) -> ConfigStore:
        """Read the file. A missing file is an empty config.

        Raises:
            ConfigurationError: If the file exists but is not a JSON object.
        """
        if not os.path.exists(self.path):
            logger.debug("No config file at %s", self.path)
            self._data = {}
            return self

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                text = await f.read()
            self._data = decode_json(text or "{}", Dict[str, Any])
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot read config file '{self.path}': {exc}"
            ) from exc
        return self

    async def save(self) -> None:
        """Write the config back, creating its directory; the file is user-only (0600)."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(self._data, indent=2))
        os.chmod(self.path, 0o600)
        logger.debug("Saved config to %s", self.path)

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(normalize_key(key))

    def set(self, key: str, value: Any) -> None:
        self._data[normalize_key(key)] = value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def config(self) -> CLIConfig:
        return CLIConfig.model_validate(self._data)

    def is_configured(self) -> bool:
        cfg = self.config()
        return bool(cfg.access_key_id and cfg.secret_access_key)

    def credentials(self) -> AWSApiKey:
        """Build credentials for the client.

        Raises:
            ConfigurationMissingError: If the access key id or secret key is unset.
        """
        cfg = self.config()
        if not (cfg.access_key_id and cfg.secret_access_key):
            raise ConfigurationMissingError()
        return AWSApiKey(
            access_key_id=cfg.access_key_id,
            secret_access_key=cfg.secret_access_key,
            session_token=cfg.session_token or None,
        )
