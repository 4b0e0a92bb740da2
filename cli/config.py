"""Configuration management for the couchrep console."""

import json
import os
import shutil
from pathlib import Path
from typing import Literal

from common.constants import (
    DEFAULT_LOCAL_URL,
    DEFAULT_REMOTE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    REPLICATOR_DB,
    RESERVED_PREFIX,
)
from common.logging_config import get_logger
from replicator.types import HostConfig

logger = get_logger(__name__)

HostRole = Literal["local", "remote"]


class Config:
    """Manages console configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "local_url": os.environ.get("COUCHREP_LOCAL_URL", DEFAULT_LOCAL_URL),
        "remote_url": os.environ.get("COUCHREP_REMOTE_URL", DEFAULT_REMOTE_URL),
        "timeout": DEFAULT_TIMEOUT_SECONDS,
        "replicator_db": REPLICATOR_DB,
        "reserved_prefix": RESERVED_PREFIX,
        "continuous": True,
        "create_target": True,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.couchrep/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.couchrep' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (ValueError, IOError) as e:
                logger.warning(f"Config file unreadable, using defaults: {e} [path={self.config_path}]")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError:
                    logger.warning(f"Could not back up config file [path={self.config_path}]")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config: {e} [path={self.config_path}]")
            return config

    def get_host(self, role: HostRole) -> HostConfig:
        """
        Get connection settings for the local or remote host.

        Args:
            role: "local" or "remote"

        Returns:
            HostConfig built from <role>_url, <role>_username and <role>_password
        """
        if role not in ("local", "remote"):
            raise ValueError(f"Unknown host role: {role}")
        return HostConfig(
            url=self.data.get(f'{role}_url', DEFAULT_LOCAL_URL if role == 'local' else DEFAULT_REMOTE_URL),
            username=self.data.get(f'{role}_username'),
            password=self.data.get(f'{role}_password'),
        )

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', DEFAULT_TIMEOUT_SECONDS)

    def get_replicator_db(self) -> str:
        return self.data.get('replicator_db', REPLICATOR_DB)

    def get_reserved_prefix(self) -> str:
        return self.data.get('reserved_prefix', RESERVED_PREFIX)

    def get_replication_defaults(self) -> dict:
        """
        Get default replication flags.

        Returns:
            Dictionary with 'continuous' and 'create_target'
        """
        return {
            'continuous': self.data.get('continuous', True),
            'create_target': self.data.get('create_target', True),
        }
