"""
ProjectDraft — 新建语言项目

维护项目名、语言列表和主语言选择，最后一次性创建目录与文件。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from localization.errors import ConfigError, UnknownLanguageError
from localization.project import LanguageProject
from storage.project_storage import ProjectStorage, check_project_name

logger = logging.getLogger(__name__)


class ProjectDraft:
    """
    Usage::

        draft = ProjectDraft("Menus")
        draft.add_language("es")
        draft.set_main_language("en")
        storage = draft.create("resources")
    """

    def __init__(self, project_name: str = "NewLanguageProject",
                 languages: Optional[List[str]] = None) -> None:
        self.project_name = project_name
        self.languages: List[str] = list(dict.fromkeys(languages or ["en"]))
        self.main_index = 0

    @property
    def main_language(self) -> Optional[str]:
        if not self.languages:
            return None
        return self.languages[self.main_index]

    def add_language(self, code: str) -> bool:
        """空白或重复的代码被忽略，返回是否新增"""
        code = code.strip()
        if not code or code in self.languages:
            return False
        self.languages.append(code)
        return True

    def remove_language(self, code: str) -> None:
        """
        Raises
        ------
        ConfigError
            试图删除主语言
        UnknownLanguageError
            代码不在列表中
        """
        if code not in self.languages:
            raise UnknownLanguageError(code)
        index = self.languages.index(code)
        if index == self.main_index:
            raise ConfigError("Cannot remove the main language.")
        self.languages.pop(index)
        if self.main_index > index:
            self.main_index -= 1

    def set_main_language(self, code: str) -> None:
        if code not in self.languages:
            raise UnknownLanguageError(code)
        self.main_index = self.languages.index(code)

    def build(self) -> LanguageProject:
        check_project_name(self.project_name)
        if not self.languages:
            raise ConfigError("Project needs at least one language")
        project = LanguageProject(
            project_name=self.project_name,
            main_language=self.languages[self.main_index],
            languages=list(self.languages),
        )
        project.validate()
        return project

    def create(self, root: Union[str, Path]) -> ProjectStorage:
        """在 root/<project_name>/ 下写出项目"""
        project = self.build()
        storage = ProjectStorage.create(root, project)
        logger.info("Language project created: %s", storage.project_dir)
        return storage
