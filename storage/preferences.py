"""
偏好存储 — 保存上次选择的语言

接口只有 get_string / set_string 两个方法，Catalog 启动时读取一次，
每次切换语言时写入一次。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    def get_string(self, key: str, default: str = "") -> str: ...

    def set_string(self, key: str, value: str) -> None: ...


class MemoryPreferenceStore:
    """进程内字典实现（测试 / 无界面环境）"""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get_string(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value


class QSettingsPreferenceStore:
    """
    基于 QSettings 的持久化实现

    Usage::

        prefs = QSettingsPreferenceStore("~/.langtable/prefs.ini")
        prefs.set_string("language_system/current_language", "es")
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        organization: str = "LangTable",
        application: str = "LangTable",
    ) -> None:
        if path is not None:
            path = Path(path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)
        logger.debug("Preferences stored in %s", self._settings.fileName())

    def get_string(self, key: str, default: str = "") -> str:
        value = self._settings.value(key, default)
        return default if value is None else str(value)

    def set_string(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()
