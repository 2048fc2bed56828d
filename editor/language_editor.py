"""
LanguageEditor — 翻译文件编辑逻辑（增 / 改 / 删 / 同步 / 保存）

所有语言表同时加载。主语言表的 key 集合是权威集合，
其它语言表在每次编辑后都与它保持 key 对齐（缺失的 key 补空字符串）。
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from localization.errors import (
    DuplicateKeyError,
    MissingFileError,
    ParseError,
    UnknownKeyError,
    UnknownLanguageError,
)
from localization.language_table import LanguageTable
from localization.project import LanguageProject
from storage.project_storage import ProjectStorage

logger = logging.getLogger(__name__)


class LanguageEditor:
    """
    多语言编辑器

    Usage::

        editor = LanguageEditor.open(ProjectStorage("resources/DemoProject"))
        editor.add_key("Confirm", {"es": "Confirmar"})
        editor.edit_key("Confirm", {"fr": "Confirmer"})
        editor.persist(storage)
    """

    def __init__(
        self,
        project: LanguageProject,
        tables: Optional[Mapping[str, LanguageTable]] = None,
        locked_languages: Iterable[str] = (),
    ) -> None:
        project.validate()
        tables = tables or {}
        self.project = project
        self._tables: Dict[str, LanguageTable] = {}
        for code in project.languages:
            table = tables.get(code)
            self._tables[code] = table if table is not None else LanguageTable()
        # 读取失败的语言：内存中可以编辑，但 persist() 不会覆盖磁盘上的文件
        self._locked = {code for code in locked_languages if code in self._tables}

    @classmethod
    def open(cls, storage: ProjectStorage) -> "LanguageEditor":
        """
        读取项目与全部语言文件，并同步 key。

        缺失的语言文件按空表处理；格式错误的语言文件同样以空表载入，
        但会被锁定，保存时跳过，避免用占位空字符串覆盖原有翻译。
        """
        project = storage.read_project()
        tables: Dict[str, LanguageTable] = {}
        locked: List[str] = []
        for code in project.languages:
            try:
                tables[code] = storage.read_table(code)
            except MissingFileError as exc:
                logger.warning("Language file not found: %s", exc.path)
            except ParseError as exc:
                logger.error("JSON parse error in language '%s', it will not be saved: %s", code, exc)
                locked.append(code)

        editor = cls(project, tables, locked)
        added = editor.sync()
        logger.info(
            "Editing project '%s' (%d keys, %d placeholders added)",
            project.project_name, len(editor.main_table.keys()), added,
        )
        return editor

    # ── 访问 ────────────────────────────────────────────────────

    @property
    def main_language(self) -> str:
        return self.project.main_language

    @property
    def main_table(self) -> LanguageTable:
        return self._tables[self.project.main_language]

    def table(self, code: str) -> LanguageTable:
        try:
            return self._tables[code]
        except KeyError:
            raise UnknownLanguageError(code) from None

    @property
    def tables(self) -> Dict[str, LanguageTable]:
        return dict(self._tables)

    @property
    def locked_languages(self) -> List[str]:
        """读取失败、保存时会被跳过的语言"""
        return [code for code in self.project.languages if code in self._locked]

    def values_for(self, key: str) -> Dict[str, str]:
        """某个 key 在每种语言下的值，缺失为空字符串"""
        result = {}
        for code, table in self._tables.items():
            value = table.lookup(key)
            result[code] = "" if value is None else value
        return result

    def search_keys(self, term: str = "") -> List[str]:
        """主语言 key 中包含 term（大小写不敏感）的项，按字母排序"""
        needle = term.lower()
        return sorted(k for k in self.main_table.keys() if needle in k.lower())

    # ── 增 / 改 / 删 ────────────────────────────────────────────

    def add_key(self, key: str, translations: Optional[Mapping[str, str]] = None) -> None:
        """
        新增 key。

        主语言的值为 key 本身；其它语言取 translations 中的值，未提供则为空字符串。

        Raises
        ------
        ValueError
            key 为空
        DuplicateKeyError
            主语言表中已存在（大小写不敏感）
        UnknownLanguageError
            translations 中包含项目未声明的语言
        """
        if not key or not key.strip():
            raise ValueError("Key must not be empty")
        if self.main_table.has_key(key):
            raise DuplicateKeyError(key)
        translations = dict(translations or {})
        self._check_languages(translations)

        for code, table in self._tables.items():
            if code == self.main_language:
                table.put(key, key)
            else:
                table.put(key, translations.get(code, ""))
        logger.info("Key added: %s", key)

    def edit_key(self, key: str, translations: Mapping[str, str]) -> None:
        """
        修改非主语言的翻译。

        主语言的 key / 值在这里不可修改（不支持重命名），传入时忽略。
        translations 中未出现的语言保持原值。

        Raises
        ------
        UnknownKeyError
            主语言表中没有该 key
        UnknownLanguageError
            translations 中包含项目未声明的语言（此时不做任何修改）
        """
        if not self.main_table.has_key(key):
            raise UnknownKeyError(key)
        translations = dict(translations)
        self._check_languages(translations)

        if self.main_language in translations:
            logger.warning(
                "Ignoring main language '%s' value for key '%s'; main text is read-only",
                self.main_language, key,
            )
            translations.pop(self.main_language)

        for code, value in translations.items():
            self._tables[code].put(key, value)
        logger.info("Key edited: %s (%s)", key, ", ".join(translations) or "no changes")

    def delete_key(self, key: str) -> None:
        """
        从所有语言中删除 key。

        Raises
        ------
        UnknownKeyError
            主语言表中没有该 key
        """
        if not self.main_table.has_key(key):
            raise UnknownKeyError(key)
        for table in self._tables.values():
            table.remove(key)
        logger.info("Key deleted: %s", key)

    # ── 同步 / 保存 ─────────────────────────────────────────────

    def sync(self) -> int:
        """
        确保每种语言都包含主语言的全部 key，缺失补空字符串。

        Returns
        -------
        int
            新增的占位 entry 数量
        """
        added = 0
        main_keys = self.main_table.keys()
        for code, table in self._tables.items():
            if code == self.main_language:
                continue
            for key in main_keys:
                if not table.has_key(key):
                    table.put(key, "")
                    added += 1
        if added:
            logger.debug("Sync added %d placeholder entries", added)
        return added

    def persist(self, storage: ProjectStorage) -> List[str]:
        """
        写回所有语言文件。

        空表和读取失败的语言不写入，保留磁盘上已有的文件。

        Returns
        -------
        list of str
            实际写入的语言代码
        """
        written = []
        for code in self.project.languages:
            if code in self._locked:
                logger.warning("Language '%s' failed to load, file not written", code)
                continue
            table = self._tables[code]
            if table.is_empty:
                logger.warning("No entries for language '%s', file not written", code)
                continue
            storage.write_table(code, table)
            written.append(code)
        logger.info("Saved %d language files to %s", len(written), storage.languages_dir)
        return written

    # ── 内部方法 ────────────────────────────────────────────────

    def _check_languages(self, translations: Mapping[str, str]) -> None:
        for code in translations:
            if code not in self._tables:
                raise UnknownLanguageError(code)
