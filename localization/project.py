"""
LanguageProject — 项目描述

描述文件格式::

    {"projectName": "Demo", "mainLanguage": "en", "languages": ["en", "es"]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from localization.errors import ConfigError, ParseError


@dataclass
class LanguageProject:
    """项目配置：项目名、主语言、支持的语言列表（保持插入顺序）"""
    project_name: str
    main_language: str
    languages: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # 去重，保留首次出现的位置
        self.languages = list(dict.fromkeys(self.languages))

    # ── 解析 / 序列化 ────────────────────────────────────────────

    @classmethod
    def from_data(cls, data: Any, source: Optional[str] = None) -> "LanguageProject":
        if not isinstance(data, dict):
            raise ParseError("project descriptor must be a JSON object", source)

        name = data.get("projectName", "")
        main = data.get("mainLanguage")
        languages = data.get("languages")

        if not isinstance(name, str):
            raise ParseError("'projectName' must be a string", source)
        if not isinstance(main, str):
            raise ParseError("'mainLanguage' must be a string", source)
        if not isinstance(languages, list) or not all(isinstance(c, str) for c in languages):
            raise ParseError("'languages' must be a list of strings", source)

        return cls(project_name=name, main_language=main, languages=languages)

    @classmethod
    def loads(cls, text: str, source: Optional[str] = None) -> "LanguageProject":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"invalid JSON: {exc}", source) from exc
        return cls.from_data(data, source)

    def to_data(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_name,
            "mainLanguage": self.main_language,
            "languages": list(self.languages),
        }

    def dumps(self, indent: int = 4) -> str:
        return json.dumps(self.to_data(), ensure_ascii=False, indent=indent)

    # ── 校验 ────────────────────────────────────────────────────

    def validate(self) -> None:
        """
        Raises
        ------
        ConfigError
            语言列表为空，或主语言不在语言列表中
        """
        if not self.languages:
            raise ConfigError(f"Project '{self.project_name}' declares no languages")
        if self.main_language not in self.languages:
            raise ConfigError(
                f"Main language '{self.main_language}' is not one of "
                f"{self.languages} in project '{self.project_name}'"
            )

    @property
    def secondary_languages(self) -> List[str]:
        """除主语言外的所有语言"""
        return [code for code in self.languages if code != self.main_language]
