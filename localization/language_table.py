"""
LanguageTable — 单一语言的 key → 文本表

核心数据结构：
- 有序 entry 列表（保持作者编辑顺序，序列化时原样输出）
- 派生字典: normalized key → value，每次修改后重建
- key 比较大小写不敏感（locale 无关的小写化）

文件格式::

    {"entries": [{"key": "Confirm", "value": "Confirmar"}, ...]}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from localization.errors import ParseError

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    """
    key 归一化。

    str.lower() 只使用 Unicode 默认大小写映射，不读取进程 locale，
    因此 "I" 在任何平台上都映射为 "i"。土耳其语的 "İ" 映射为 "i" + U+0307，
    "ı" 保持不变，两者都不与 "i" 相等。
    """
    return key.lower()


@dataclass
class LanguageEntry:
    """一条翻译 (key, value)"""
    key: str
    value: str = ""

    def to_data(self) -> Dict[str, str]:
        return {"key": self.key, "value": self.value}


class LanguageTable:
    """
    单语言翻译表

    Usage::

        table = LanguageTable.loads('{"entries": [{"key": "Confirm", "value": "OK"}]}')
        table.lookup("CONFIRM")          # -> "OK"
        table.put("Cancel", "Cancel")
        text = table.dumps()
    """

    def __init__(self, entries: Optional[Iterable[LanguageEntry]] = None) -> None:
        # entry 对象只在表内部修改，进出都复制
        self._entries: List[LanguageEntry] = [LanguageEntry(e.key, e.value) for e in entries or []]
        self._mapping: Dict[str, str] = {}
        self._rebuild()

    # ── 解析 / 序列化 ────────────────────────────────────────────

    @classmethod
    def from_data(cls, data: Any, source: Optional[str] = None) -> "LanguageTable":
        """
        从已解析的 JSON 对象构建。

        Parameters
        ----------
        data : dict
            {"entries": [...]} 结构
        source : str, optional
            仅用于错误信息（通常是文件路径）

        Raises
        ------
        ParseError
            结构不符合语言文件格式
        """
        if not isinstance(data, dict):
            raise ParseError("language file must be a JSON object", source)

        raw_entries = data.get("entries")
        if raw_entries is None:
            return cls()
        if not isinstance(raw_entries, list):
            raise ParseError("'entries' must be a list", source)

        entries: List[LanguageEntry] = []
        for index, raw in enumerate(raw_entries):
            if not isinstance(raw, dict):
                raise ParseError(f"entry #{index} is not an object", source)
            key = raw.get("key")
            if not isinstance(key, str):
                raise ParseError(f"entry #{index} has no string 'key'", source)
            value = raw.get("value", "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ParseError(f"entry #{index} ('{key}') has a non-string 'value'", source)
            entries.append(LanguageEntry(key, value))

        table = cls(entries)
        if len(table._mapping) < len(entries):
            logger.debug(
                "%s: %d duplicate keys, later entries win",
                source or "<table>", len(entries) - len(table._mapping),
            )
        return table

    @classmethod
    def loads(cls, text: str, source: Optional[str] = None) -> "LanguageTable":
        """从 JSON 文本解析"""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"invalid JSON: {exc}", source) from exc
        return cls.from_data(data, source)

    def to_data(self) -> Dict[str, List[Dict[str, str]]]:
        """按当前 entry 顺序输出"""
        return {"entries": [entry.to_data() for entry in self._entries]}

    def dumps(self, indent: int = 4) -> str:
        return json.dumps(self.to_data(), ensure_ascii=False, indent=indent)

    # ── 查询 ────────────────────────────────────────────────────

    def lookup(self, key: str) -> Optional[str]:
        """大小写不敏感查找，未找到返回 None"""
        return self._mapping.get(normalize_key(key))

    def has_key(self, key: str) -> bool:
        return normalize_key(key) in self._mapping

    def keys(self) -> List[str]:
        """按 entry 顺序返回 key（同一归一化 key 只保留第一次出现的写法）"""
        seen = set()
        result = []
        for entry in self._entries:
            norm = normalize_key(entry.key)
            if norm not in seen:
                seen.add(norm)
                result.append(entry.key)
        return result

    @property
    def entries(self) -> List[LanguageEntry]:
        return [LanguageEntry(e.key, e.value) for e in self._entries]

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def as_dict(self) -> Dict[str, str]:
        """归一化 key → value 的副本"""
        return dict(self._mapping)

    # ── 修改 ────────────────────────────────────────────────────

    def put(self, key: str, value: str) -> None:
        """
        插入或更新。

        已存在同一归一化 key 的 entry 时只更新 value，保留原 key 写法和位置。
        """
        norm = normalize_key(key)
        found = False
        for entry in self._entries:
            if normalize_key(entry.key) == norm:
                entry.value = value
                found = True
        if not found:
            self._entries.append(LanguageEntry(key, value))
        self._mapping[norm] = value

    def remove(self, key: str) -> bool:
        """删除所有归一化 key 相同的 entry，返回是否删除了内容"""
        norm = normalize_key(key)
        before = len(self._entries)
        self._entries = [e for e in self._entries if normalize_key(e.key) != norm]
        if len(self._entries) == before:
            return False
        self._rebuild()
        return True

    def clear(self) -> None:
        self._entries.clear()
        self._mapping.clear()

    # ── 内部方法 ────────────────────────────────────────────────

    def _rebuild(self) -> None:
        mapping: Dict[str, str] = {}
        for entry in self._entries:
            mapping[normalize_key(entry.key)] = entry.value
        self._mapping = mapping

    # ── 协议 ────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_key(key)

    def __iter__(self) -> Iterator[LanguageEntry]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"LanguageTable({len(self._entries)} entries)"
