"""
ProjectStorage — 项目目录布局

目录结构::

    <project_dir>/
        LanguageProject.json
        Languages/
            en.json
            es.json
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Union

from localization.errors import ConfigError, MissingFileError, ParseError
from localization.language_table import LanguageTable
from localization.project import LanguageProject

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "LanguageProject.json"
LANGUAGES_DIR_NAME = "Languages"


def check_project_name(name: str) -> None:
    """
    项目名直接作为目录名使用，不能包含路径分隔符或指向上级目录。

    Raises
    ------
    ConfigError
    """
    if not name or not name.strip():
        raise ConfigError("Project name must not be empty")
    if "/" in name or "\\" in name or name in (".", "..") or Path(name).is_absolute():
        raise ConfigError(f"Invalid project name: {name!r}")


def _write_atomic(path: Path, text: str) -> None:
    """先写同目录临时文件再替换，写入中途失败时原文件保持不变"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class ProjectStorage:
    """
    单个项目目录的读写

    Usage::

        storage = ProjectStorage("resources/DemoProject")
        project = storage.read_project()
        tables = storage.load_tables(project.languages)
    """

    def __init__(self, project_dir: Union[str, Path]) -> None:
        self.project_dir = Path(project_dir)

    @property
    def project_file(self) -> Path:
        return self.project_dir / PROJECT_FILE_NAME

    @property
    def languages_dir(self) -> Path:
        return self.project_dir / LANGUAGES_DIR_NAME

    def language_file(self, code: str) -> Path:
        return self.languages_dir / f"{code}.json"

    # ── 项目描述 ────────────────────────────────────────────────

    def read_project(self) -> LanguageProject:
        """
        Raises
        ------
        MissingFileError
            描述文件不存在
        ParseError
            描述文件格式错误
        """
        text = self._read_text(self.project_file)
        return LanguageProject.loads(text, source=str(self.project_file))

    def write_project(self, project: LanguageProject) -> None:
        self.project_dir.mkdir(parents=True, exist_ok=True)
        _write_atomic(self.project_file, project.dumps())
        logger.info("Project descriptor written: %s", self.project_file)

    # ── 语言文件 ────────────────────────────────────────────────

    def list_languages(self) -> List[str]:
        """语言目录下已存在的语言代码"""
        if not self.languages_dir.is_dir():
            return []
        return sorted(p.stem for p in self.languages_dir.glob("*.json"))

    def read_table(self, code: str) -> LanguageTable:
        path = self.language_file(code)
        text = self._read_text(path)
        return LanguageTable.loads(text, source=str(path))

    def write_table(self, code: str, table: LanguageTable) -> None:
        self.languages_dir.mkdir(parents=True, exist_ok=True)
        _write_atomic(self.language_file(code), table.dumps())

    def load_tables(self, codes: Iterable[str]) -> Dict[str, LanguageTable]:
        """
        批量读取。缺失文件按空表处理，格式错误记录日志后同样使用空表，
        不会中断整个加载过程。
        """
        tables: Dict[str, LanguageTable] = {}
        for code in codes:
            try:
                tables[code] = self.read_table(code)
            except MissingFileError as exc:
                logger.warning("Language file not found: %s", exc.path)
                tables[code] = LanguageTable()
            except ParseError as exc:
                logger.error("JSON parse error in language '%s': %s", code, exc)
                tables[code] = LanguageTable()
        return tables

    # ── 创建项目 ────────────────────────────────────────────────

    @classmethod
    def create(cls, root: Union[str, Path], project: LanguageProject) -> "ProjectStorage":
        """
        在 root 下创建 <projectName>/ 目录结构。

        已存在的语言文件不会被覆盖，描述文件总是重写。
        """
        check_project_name(project.project_name)
        project.validate()
        storage = cls(Path(root) / project.project_name)
        storage.languages_dir.mkdir(parents=True, exist_ok=True)

        for code in project.languages:
            path = storage.language_file(code)
            if not path.exists():
                storage.write_table(code, LanguageTable())
                logger.debug("Created empty language file: %s", path)

        storage.write_project(project)
        return storage

    # ── 内部方法 ────────────────────────────────────────────────

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise MissingFileError(path) from exc

    def __repr__(self) -> str:
        return f"ProjectStorage({str(self.project_dir)!r})"
