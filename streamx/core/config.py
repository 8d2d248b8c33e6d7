"""Layered configuration: environment variables over config.yaml over defaults.

Each top-level YAML key maps to one section class; each section reads its own
APP_<SECTION>_ environment variables.
"""

import os
from typing import Any, Dict, List, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from streamx.transport import TRANSPORT_MODES
from streamx.transport.native import MOBILE_USER_AGENT
from streamx.transport.web import DEFAULT_CORS_PROXY

DEFAULT_PIPED_INSTANCES = [
    "https://pipedapi.kavin.rocks",
    "https://api.piped.vic.click",
    "https://piped-api.garudalinux.org",
    "https://pipedapi.drgns.space",
    "https://pa.il.ax",
    "https://pipedapi.system41.site",
    "https://api.piped.privacy.com.de",
]


class BaseConfigSection(BaseSettings):
    """Config section where environment variables beat YAML values.

    YAML data arrives as init kwargs, which pydantic-settings would normally
    rank above the environment; the source order is swapped here.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


class ServerConfig(BaseConfigSection):
    """Bind address for uvicorn"""

    host: str = "0.0.0.0"  # nosec B104 - containerized deployment binds all interfaces
    port: int = 8000

    model_config = SettingsConfigDict(env_prefix="APP_SERVER_")


class TransportConfig(BaseConfigSection):
    """HTTP transport configuration"""

    mode: str = "native"  # "native" or "web"
    user_agent: str = MOBILE_USER_AGENT
    cors_proxy: str = DEFAULT_CORS_PROXY
    timeout: float = 10.0  # seconds

    model_config = SettingsConfigDict(env_prefix="APP_TRANSPORT_")

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in TRANSPORT_MODES:
            raise ValueError(f"mode must be one of {list(TRANSPORT_MODES)}")
        return v_lower

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class PipedConfig(BaseConfigSection):
    """YouTube (Piped mirror pool) configuration"""

    enabled: bool = True
    instances: List[str] = Field(default_factory=lambda: list(DEFAULT_PIPED_INSTANCES))
    max_attempts: int = 3

    model_config = SettingsConfigDict(env_prefix="APP_PIPED_")

    @field_validator("instances")
    @classmethod
    def validate_instances(cls, v: List[str]) -> List[str]:
        cleaned = [i.strip().rstrip("/") for i in v if i.strip()]
        if not cleaned:
            raise ValueError("instances must contain at least one base URL")
        return cleaned

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v


class DailymotionConfig(BaseConfigSection):
    """Dailymotion provider configuration"""

    enabled: bool = True
    api_base: str = "https://api.dailymotion.com"
    limit: int = 20

    model_config = SettingsConfigDict(env_prefix="APP_DAILYMOTION_")


class PeerTubeConfig(BaseConfigSection):
    """PeerTube (SepiaSearch) provider configuration"""

    enabled: bool = True
    search_api: str = "https://sepiasearch.org/api/v1/search/videos"
    trending_count: int = 10
    search_count: int = 20

    model_config = SettingsConfigDict(env_prefix="APP_PEERTUBE_")


class FallbackConfig(BaseConfigSection):
    """Preview-mode fallback configuration"""

    delay: float = 0.8  # seconds before serving mock data

    model_config = SettingsConfigDict(env_prefix="APP_FALLBACK_")

    @field_validator("delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("delay must not be negative")
        return v


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseConfigSection):
    """structlog output"""

    level: str = "INFO"
    format: str = "json"  # "json" or "console"

    model_config = SettingsConfigDict(env_prefix="APP_LOGGING_")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}")
        return level


class SecurityConfig(BaseConfigSection):
    """Browser access to the HTTP API"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_prefix="APP_SECURITY_")


class MonitoringConfig(BaseConfigSection):
    """Prometheus exposition"""

    metrics_enabled: bool = True

    model_config = SettingsConfigDict(env_prefix="APP_MONITORING_")


class Config(BaseSettings):
    """All configuration sections"""

    server: ServerConfig = Field(default_factory=ServerConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    piped: PipedConfig = Field(default_factory=PipedConfig)
    dailymotion: DailymotionConfig = Field(default_factory=DailymotionConfig)
    peertube: PeerTubeConfig = Field(default_factory=PeerTubeConfig)
    fallback: FallbackConfig = Field(default_factory=FallbackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="APP_")


# YAML top-level key -> section class
SECTIONS: Dict[str, Type[BaseConfigSection]] = {
    "server": ServerConfig,
    "transport": TransportConfig,
    "piped": PipedConfig,
    "dailymotion": DailymotionConfig,
    "peertube": PeerTubeConfig,
    "fallback": FallbackConfig,
    "logging": LoggingConfig,
    "security": SecurityConfig,
    "monitoring": MonitoringConfig,
}


class ConfigService:
    """Loads Config once and hands it out afterwards."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: YAML file; defaults to $APP_CONFIG_PATH, then config.yaml.
                A missing file means defaults plus environment.
        """
        self.config_path = config_path or os.environ.get("APP_CONFIG_PATH", "config.yaml")
        self._config: Optional[Config] = None

    def _read_yaml(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.config_path} must contain a mapping of sections")
        return data

    def load(self) -> Config:
        """
        Build every section from YAML data, letting environment variables win.

        Raises:
            ValueError: If the file is not a mapping or a value fails validation
        """
        data = self._read_yaml()
        sections = {name: cls(**(data.get(name) or {})) for name, cls in SECTIONS.items()}
        self._config = Config(**sections)
        return self._config

    @property
    def config(self) -> Config:
        if self._config is None:
            raise ValueError("Configuration not loaded. Call load() first.")
        return self._config
