"""配置管理器模块."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError

from layer_generator.models.app_settings import Settings
from layer_generator.models.generator_config import GeneratorConfig
from layer_generator.utils.constants import APP_DATA_DIR
from layer_generator.utils.exceptions import ConfigError
from layer_generator.utils.logger import set_log_level, setup_logger

logger = setup_logger(__name__)

# 配置文件路径
DEFAULT_GENERATOR_CONFIG_FILE = APP_DATA_DIR / "generator_config.json"


class ConfigManager:
    """配置管理器.

    负责应用设置和默认生成配置的加载、保存和管理。

    Attributes:
        settings: 应用设置
        generator_config: 默认生成配置
    """

    _instance: Optional["ConfigManager"] = None

    def __new__(cls) -> "ConfigManager":
        """单例模式."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """初始化配置管理器."""
        if self._initialized:
            return

        self._settings: Optional[Settings] = None
        self._generator_config: Optional[GeneratorConfig] = None
        self._initialized = True

        logger.debug("配置管理器初始化完成")

    @property
    def settings(self) -> Settings:
        """获取应用设置."""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    @property
    def generator_config(self) -> GeneratorConfig:
        """获取默认生成配置."""
        if self._generator_config is None:
            self._generator_config = self._load_generator_config()
        return self._generator_config

    def _load_settings(self) -> Settings:
        """加载应用设置.

        从环境变量和 .env 文件加载，并应用日志级别。

        Returns:
            Settings 实例
        """
        try:
            settings = Settings()
        except ValidationError as e:
            logger.error(f"加载应用设置失败: {e}")
            raise ConfigError(f"加载应用设置失败: {e}") from e

        set_log_level(settings.log_level)
        logger.debug(f"应用设置加载完成: log_level={settings.log_level}")
        return settings

    def _load_generator_config(self) -> GeneratorConfig:
        """加载默认生成配置.

        如果配置文件存在则从文件加载，否则根据应用设置构建。

        Returns:
            GeneratorConfig 实例
        """
        if DEFAULT_GENERATOR_CONFIG_FILE.exists():
            try:
                content = DEFAULT_GENERATOR_CONFIG_FILE.read_text(encoding="utf-8")
                config = GeneratorConfig.from_json(content)
                logger.debug("从文件加载默认生成配置")
                return config
            except (OSError, ValidationError) as e:
                logger.warning(f"加载生成配置文件失败，使用默认配置: {e}")

        return self.settings.to_generator_config()

    def save_generator_config(self, config: GeneratorConfig) -> None:
        """保存生成配置为默认配置.

        Args:
            config: 生成配置
        """
        try:
            DEFAULT_GENERATOR_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
            DEFAULT_GENERATOR_CONFIG_FILE.write_text(config.to_json(), encoding="utf-8")
        except OSError as e:
            logger.error(f"保存生成配置失败: {e}")
            raise ConfigError(f"保存生成配置失败: {e}") from e

        self._generator_config = config
        logger.info("默认生成配置已保存")

    def reload(self) -> None:
        """重新加载所有配置."""
        self._settings = None
        self._generator_config = None
        logger.info("配置已重新加载")

    def reset_to_defaults(self) -> None:
        """重置为默认配置."""
        if DEFAULT_GENERATOR_CONFIG_FILE.exists():
            DEFAULT_GENERATOR_CONFIG_FILE.unlink()

        self.reload()
        logger.info("配置已重置为默认值")


def get_config() -> ConfigManager:
    """获取配置管理器实例.

    Returns:
        ConfigManager 单例实例
    """
    return ConfigManager()


def reset_config_manager() -> None:
    """重置配置管理器单例."""
    ConfigManager._instance = None
