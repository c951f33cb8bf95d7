import json
import logging
import os
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Signal

from intel_brief.models import AIProvider, AppSettings

logger = logging.getLogger('intel_brief.config.settings_manager')

# 设置以 JSON 形式保存在这个固定的键下
SETTINGS_KEY = "intel_brief/app_settings"
ORGANIZATION_NAME = "IntelBrief"
APPLICATION_NAME = "IntelBrief"

GEMINI_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


def get_gemini_api_key() -> Optional[str]:
    """Gemini 的 key 只来自环境变量（或 .env），界面上不可编辑。"""
    for var in GEMINI_ENV_VARS:
        value = os.getenv(var)
        if value and value.strip():
            return value.strip()
    return None


def _mask_api_key(api_key: str) -> str:
    if not api_key:
        return ""
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:4]}...{api_key[-4:]}"


class SettingsManager(QObject):
    """
    管理 AppSettings，使用 QSettings 持久化。

    整个设置对象序列化为 JSON 存在 SETTINGS_KEY 下。Gemini 的 key 不会被保存。
    """

    settings_changed = Signal()

    def __init__(self, settings_file: Optional[str] = None):
        """
        Args:
            settings_file: INI 文件路径。为 None 时使用平台默认的用户配置位置。
        """
        super().__init__()
        if settings_file:
            self.qsettings = QSettings(settings_file, QSettings.Format.IniFormat)
        else:
            self.qsettings = QSettings(QSettings.Format.IniFormat, QSettings.Scope.UserScope,
                                       ORGANIZATION_NAME, APPLICATION_NAME)
        logger.debug(f"SettingsManager using settings file: {self.qsettings.fileName()}")
        self._settings = self._load()

    def _load(self) -> AppSettings:
        raw = self.qsettings.value(SETTINGS_KEY, None)
        if not raw:
            logger.info("No stored settings found, using defaults.")
            return AppSettings()
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            settings = AppSettings.from_dict(data)
        except (json.JSONDecodeError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Stored settings under '{SETTINGS_KEY}' are invalid ({e}). Using defaults.")
            return AppSettings()
        # Gemini 的 key 不从存储中读取
        settings.keys.pop(AIProvider.Gemini, None)
        masked = {p.value: _mask_api_key(k) for p, k in settings.keys.items()}
        logger.info(f"Loaded settings: provider={settings.provider.value}, keys={masked}")
        return settings

    def _save(self) -> None:
        data = self._settings.to_dict()
        data["keys"].pop(AIProvider.Gemini.value, None)
        self.qsettings.setValue(SETTINGS_KEY, json.dumps(data, ensure_ascii=False))
        self.qsettings.sync()
        logger.debug(f"Settings saved to {self.qsettings.fileName()}")
        self.settings_changed.emit()

    def get_settings(self) -> AppSettings:
        """Returns a copy; callers never mutate the stored object."""
        return AppSettings(provider=self._settings.provider, keys=dict(self._settings.keys))

    def set_provider(self, provider: AIProvider) -> None:
        provider = AIProvider(provider)
        if provider == self._settings.provider:
            return
        self._settings.provider = provider
        logger.info(f"Active provider set to {provider.value}")
        self._save()

    def set_api_key(self, provider: AIProvider, api_key: str) -> None:
        provider = AIProvider(provider)
        if provider == AIProvider.Gemini:
            raise ValueError("The Gemini API key is managed by the environment and cannot be stored.")
        self._settings.keys[provider] = (api_key or "").strip()
        logger.info(f"API key for {provider.value} updated: '{_mask_api_key(self._settings.keys[provider])}'")
        self._save()

    def reset(self) -> None:
        self._settings = AppSettings()
        self.qsettings.remove(SETTINGS_KEY)
        self.qsettings.sync()
        logger.info("Settings reset to defaults.")
        self.settings_changed.emit()
