"""
LanguageCatalog — 运行时语言管理器

- 持有项目中每种语言的 LanguageTable
- 运行时切换当前语言，同步通知所有订阅者
- fallback: 当前语言表 → "[key]"（调试用，缺失的 key 在界面上一目了然）
- 上次选择的语言通过 PreferenceStore 持久化

状态机::

    UNINITIALIZED ──open()──▶ READY ──set_language()──▶ SWITCHING ──▶ READY
          ▲                                                        │
          └──────────────────────── close() ◀──────────────────────┘
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, List, Mapping, Optional

from localization.errors import CatalogStateError, UnknownLanguageError
from localization.language_table import LanguageTable
from localization.project import LanguageProject

logger = logging.getLogger(__name__)

CURRENT_LANGUAGE_KEY = "language_system/current_language"

NULL_KEY_TEXT = "[null]"

LanguageChangedCallback = Callable[[str], None]


class CatalogState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SWITCHING = "switching"


class LanguageCatalog:
    """
    语言目录

    Usage::

        catalog = LanguageCatalog()
        catalog.open(project, {"en": en_table, "es": es_table})
        catalog.subscribe(lambda code: refresh_ui())

        catalog.lang_string("Confirm")      # -> "Confirm"
        catalog.set_language("es")          # 通知订阅者
        catalog.lang_upper("Confirm")       # -> "CONFIRMAR"
        catalog.lang_string("Missing")      # -> "[Missing]"

    订阅者在回调中再次调用 set_language() 会直接递归，行为未定义，不要这样做。
    """

    def __init__(self) -> None:
        self._state = CatalogState.UNINITIALIZED
        self._project: Optional[LanguageProject] = None
        self._tables: Dict[str, LanguageTable] = {}
        self._current_language: Optional[str] = None
        self._current_table = LanguageTable()
        self._preferences = None
        self._subscribers: List[LanguageChangedCallback] = []

    # ── 生命周期 ────────────────────────────────────────────────

    def open(
        self,
        project: LanguageProject,
        tables_by_language: Optional[Mapping[str, LanguageTable]] = None,
        preferences=None,
    ) -> None:
        """
        打开项目。

        Parameters
        ----------
        project : LanguageProject
            项目配置，主语言必须在语言列表中
        tables_by_language : dict, optional
            语言代码 → LanguageTable；缺失的语言使用空表
        preferences : PreferenceStore, optional
            读取 / 保存上次选择的语言

        Raises
        ------
        ConfigError
            项目配置不合法
        """
        project.validate()
        tables_by_language = dict(tables_by_language or {})

        tables: Dict[str, LanguageTable] = {}
        for code in project.languages:
            table = tables_by_language.pop(code, None)
            if table is None:
                logger.warning("No table for language '%s', using an empty one", code)
                table = LanguageTable()
            tables[code] = table
        for code in tables_by_language:
            logger.warning("Ignoring table for undeclared language '%s'", code)

        current = project.main_language
        if preferences is not None:
            saved = preferences.get_string(CURRENT_LANGUAGE_KEY, project.main_language)
            if saved in tables:
                current = saved
            else:
                logger.warning(
                    "Saved language '%s' is not part of project '%s', using '%s'",
                    saved, project.project_name, current,
                )

        self._project = project
        self._tables = tables
        self._preferences = preferences
        self._current_language = current
        self._current_table = tables[current]
        self._state = CatalogState.READY
        logger.info(
            "Language project opened: %s (%d languages, current=%s)",
            project.project_name, len(tables), current,
        )

    @classmethod
    def from_storage(cls, storage, preferences=None) -> "LanguageCatalog":
        """
        通过存储协作者读取描述文件和全部语言文件后打开。

        描述文件的错误直接抛出；单个语言文件缺失或损坏只记录日志并使用空表。
        """
        project = storage.read_project()
        catalog = cls()
        catalog.open(project, storage.load_tables(project.languages), preferences)
        return catalog

    def close(self) -> None:
        """释放所有语言表和订阅者，回到 UNINITIALIZED"""
        self._tables.clear()
        self._subscribers.clear()
        self._project = None
        self._preferences = None
        self._current_language = None
        self._current_table = LanguageTable()
        self._state = CatalogState.UNINITIALIZED
        logger.debug("Language catalog closed")

    # ── 订阅 ────────────────────────────────────────────────────

    def subscribe(self, callback: LanguageChangedCallback) -> None:
        """注册语言切换回调，按注册顺序调用，参数为新的语言代码"""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: LanguageChangedCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            logger.debug("Callback %r was not subscribed", callback)

    # ── 语言切换 ────────────────────────────────────────────────

    def set_language(self, code: str) -> None:
        """
        切换当前语言。

        与当前语言相同时不做任何事（也不发通知）。

        Raises
        ------
        UnknownLanguageError
            code 不在项目语言列表中，当前语言保持不变
        CatalogStateError
            Catalog 尚未打开
        """
        if self._state is CatalogState.UNINITIALIZED:
            raise CatalogStateError("Language catalog is not open")
        if code == self._current_language:
            return
        if code not in self._tables:
            raise UnknownLanguageError(code)

        self._state = CatalogState.SWITCHING
        self._current_language = code
        self._current_table = self._tables[code]
        if self._preferences is not None:
            self._preferences.set_string(CURRENT_LANGUAGE_KEY, code)
        self._state = CatalogState.READY
        logger.info("Language switched: %s", code)

        self._notify(code)

    def _notify(self, code: str) -> None:
        for callback in list(self._subscribers):
            try:
                callback(code)
            except Exception:
                logger.exception("Language change subscriber %r failed", callback)

    # ── 查询 ────────────────────────────────────────────────────

    def lang_string(self, key: Optional[str]) -> str:
        """
        当前语言下的文本。

        Returns
        -------
        str
            key 为空返回 "[null]"；未找到返回 "[key]"
        """
        if not key:
            return NULL_KEY_TEXT
        value = self._current_table.lookup(key)
        if value is None:
            logger.debug("Missing translation key: '%s' [%s]", key, self._current_language)
            return f"[{key}]"
        return value

    def lang_upper(self, key: Optional[str]) -> str:
        return self.lang_string(key).upper()

    def lang_lower(self, key: Optional[str]) -> str:
        return self.lang_string(key).lower()

    def lang_capitalized(self, key: Optional[str]) -> str:
        """首字母大写，其余小写"""
        value = self.lang_string(key)
        if not value:
            return value
        return value[0].upper() + value[1:].lower()

    def has_key(self, key: Optional[str]) -> bool:
        """只检查当前语言表"""
        if not key:
            return False
        return self._current_table.has_key(key)

    # ── 属性 ────────────────────────────────────────────────────

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def project(self) -> Optional[LanguageProject]:
        return self._project

    @property
    def current_language(self) -> Optional[str]:
        return self._current_language

    @property
    def main_language(self) -> Optional[str]:
        return self._project.main_language if self._project else None

    @property
    def languages(self) -> List[str]:
        return list(self._project.languages) if self._project else []

    def table(self, code: str) -> LanguageTable:
        """
        Raises
        ------
        UnknownLanguageError
            code 不在项目语言列表中
        """
        try:
            return self._tables[code]
        except KeyError:
            raise UnknownLanguageError(code) from None
