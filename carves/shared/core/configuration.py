"""
Configuration Management for the Yala Carves storefront

Settings are merged with a 4-tier precedence hierarchy:
environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class StoreConfig(BaseModel):
    """Remote document store (Firebase Realtime Database) settings"""
    model_config = ConfigDict(extra='forbid')

    database_url: Optional[str] = Field(default=None, description="Realtime Database root URL")
    auth_token: Optional[str] = Field(default=None, description="Database secret or ID token")
    timeout: float = Field(default=15.0, ge=1.0, le=120.0, description="Request timeout (seconds)")
    offline: bool = Field(default=False, description="Use in-memory repositories")

    # Collection paths
    products_collection: str = Field(default="products")
    cart_collection: str = Field(default="cart")
    wishlist_collection: str = Field(default="wishlist")
    users_collection: str = Field(default="users")


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    flet_web_mode: bool = Field(default=False, description="Enable web mode")
    flet_port: int = Field(default=8550, ge=1024, le=65535, description="Web server port")

    app_title: str = Field(default="Yala Carves")
    primary_color: str = Field(default="#684C2F", description="App bar and card color")
    background_color: str = Field(default="#F0EAE1")


class LoggingConfig(BaseModel):
    """Log file and verbosity"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO")
    file: str = Field(default="data/logs/storefront.log")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=50)


class SystemConfig(BaseModel):
    """Complete storefront configuration"""
    model_config = ConfigDict(extra='forbid')

    store: StoreConfig = Field(default_factory=StoreConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# env var → (section, key, type)
ENV_MAP: Dict[str, tuple[str, str, type]] = {
    'FIREBASE_DATABASE_URL': ('store', 'database_url', str),
    'FIREBASE_AUTH_TOKEN': ('store', 'auth_token', str),
    'STORE_TIMEOUT': ('store', 'timeout', float),
    'STORE_OFFLINE': ('store', 'offline', bool),
    'FLET_WEB_MODE': ('ui', 'flet_web_mode', bool),
    'FLET_PORT': ('ui', 'flet_port', int),
    'LOG_LEVEL': ('logging', 'level', str),
    'LOG_FILE': ('logging', 'file', str),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")
            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, kind) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if kind is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            elif kind in (int, float):
                try:
                    converted = kind(value)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric {env_key}={value!r}")
                    continue
            else:
                converted = value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Merge ``config_updates`` into project.yaml"""
        project_path = self.config_dir / "project.yaml"
        existing_config = self._load_yaml_file(project_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(project_path, existing_config)
        if success:
            self._project_config = None
        return success

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None
        self._project_config = None


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
