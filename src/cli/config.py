"""YAML configuration loading and validation.

This module builds the immutable GistConfig from credentials, environment
defaults and an optional YAML file. Components receive the resulting config
and never read the environment themselves.
"""

import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from src.gist_client.auth import Authenticator, Credentials
from src.models.gist_config import DEFAULT_API_URL, DEFAULT_EDITOR, GistConfig

from .errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure (every key optional):
        editor: "code --wait"
        api_url: "https://api.github.com"
        work_dir: "~/gists"

    The file lives in the default work directory ($HOME/.gist/config.yaml);
    its work_dir key relocates the cache and mirrors. A missing file means
    defaults only.
    """

    DEFAULT_WORK_DIR_NAME = '.gist'
    CONFIG_FILE_NAME = 'config.yaml'

    # Allowed keys and their expected type
    FIELDS = {
        'editor': str,
        'api_url': str,
        'work_dir': str,
    }

    @classmethod
    def default_config_path(cls, env: Optional[Mapping[str, str]] = None) -> str:
        """Return $HOME/.gist/config.yaml for the given environment."""
        env = os.environ if env is None else env
        return os.path.join(cls._default_work_dir(env), cls.CONFIG_FILE_NAME)

    @classmethod
    def _default_work_dir(cls, env: Mapping[str, str]) -> str:
        home = env.get('HOME') or os.path.expanduser('~')
        return os.path.join(home, cls.DEFAULT_WORK_DIR_NAME)

    @classmethod
    def load(
        cls,
        credentials: Credentials,
        config_path: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> GistConfig:
        """Build the tool configuration.

        Args:
            credentials: GitHub user and token
            config_path: YAML file to read (defaults to $HOME/.gist/config.yaml)
            env: Environment used for defaults (defaults to os.environ)

        Returns:
            GistConfig with file values overriding the defaults

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        env = os.environ if env is None else env
        if config_path is None:
            config_path = cls.default_config_path(env)

        values = cls._read_file(config_path)

        work_dir = values.get('work_dir') or cls._default_work_dir(env)
        work_dir = os.path.abspath(os.path.expanduser(work_dir))

        return GistConfig(
            user=credentials.user,
            token=credentials.token,
            work_dir=work_dir,
            editor=values.get('editor') or env.get('EDITOR') or DEFAULT_EDITOR,
            api_url=(values.get('api_url') or DEFAULT_API_URL).rstrip('/'),
        )

    @classmethod
    def _read_file(cls, config_path: str) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No config file at {config_path}, using defaults")
            return {}
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}")

        if not content.strip():
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(data).__name__}"
            )

        return cls._validate(data)

    @classmethod
    def _validate(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in data.items():
            if key not in cls.FIELDS:
                logger.warning(f"Ignoring unknown configuration key '{key}'")
                continue
            if value is not None and not isinstance(value, cls.FIELDS[key]):
                raise ConfigError(
                    f"must be a string, got {type(value).__name__}",
                    key,
                )
        return {key: data[key] for key in cls.FIELDS if data.get(key) is not None}


def load_config(
    authenticator: Optional[Authenticator] = None,
    config_path: Optional[str] = None,
) -> GistConfig:
    """Load credentials and the configuration file in one step.

    Raises:
        InvalidCredentialsError: If the user name or token is missing
        ConfigError: If the configuration file is invalid
    """
    credentials = (authenticator or Authenticator()).get_credentials()
    return ConfigLoader.load(credentials, config_path)
