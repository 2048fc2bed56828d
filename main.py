#!/usr/bin/env python3
"""
LangTable — 多语言翻译表管理工具

入口点：初始化日志、加载配置、打开语言项目，执行命令行子命令。

    python main.py keys --search conf
    python main.py show Confirm --lang es --case upper
    python main.py add "Load Game" --set es="Cargar partida"
    python main.py switch fr
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# 确保项目根目录在 sys.path
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from localization import LanguageCatalog, LocalizationError, runtime  # noqa: E402
from storage import MemoryPreferenceStore, ProjectStorage, QSettingsPreferenceStore  # noqa: E402

logger = logging.getLogger("LangTable")


def setup_logging(level: str = "INFO") -> None:
    """配置日志系统"""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=log_format,
        datefmt="%H:%M:%S",
    )


def load_config(config_path: Optional[Path] = None) -> dict:
    """加载配置文件，不存在时返回空字典"""
    import yaml

    config_path = config_path or PROJECT_ROOT / "config" / "settings.yaml"
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    return {}


def create_preferences(config: dict):
    """根据配置创建偏好存储"""
    prefs_config = config.get("preferences", {}) or {}
    backend = prefs_config.get("backend", "qsettings")
    if backend == "memory":
        return MemoryPreferenceStore()
    if backend != "qsettings":
        logger.warning("Unknown preferences backend '%s', using qsettings", backend)
    return QSettingsPreferenceStore(prefs_config.get("file") or None)


def open_catalog(storage: ProjectStorage, config: dict) -> LanguageCatalog:
    """打开项目并注册为进程级 Catalog；配置中指定了语言时切换过去"""
    catalog = runtime.install(LanguageCatalog.from_storage(storage, create_preferences(config)))
    lang = (config.get("language_system", {}) or {}).get("language", "auto")
    if lang and lang != "auto":
        catalog.set_language(lang)
    return catalog


def resolve_project_dir(args: argparse.Namespace, config: dict) -> Path:
    if args.project:
        return Path(args.project)
    project_dir = Path((config.get("language_system", {}) or {}).get(
        "project_dir", "resources/DemoProject"))
    if not project_dir.is_absolute():
        project_dir = PROJECT_ROOT / project_dir
    return project_dir


def parse_assignments(pairs: Optional[List[str]]) -> Dict[str, str]:
    """把 ["es=Hola", "fr=Salut"] 解析为字典"""
    result = {}
    for pair in pairs or []:
        code, sep, text = pair.partition("=")
        if not sep or not code.strip():
            raise argparse.ArgumentTypeError(f"Expected CODE=TEXT, got '{pair}'")
        result[code.strip()] = text
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="langtable", description="Manage multi-language text tables")
    parser.add_argument("--config", type=Path, help="path to settings.yaml")
    parser.add_argument("--project", help="project directory (overrides config)")
    parser.add_argument("--log-level", help="logging level (overrides config)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("keys", help="list keys with all translations")
    p.add_argument("--search", default="", help="case-insensitive key filter")

    p = sub.add_parser("show", help="resolve a key in the current language")
    p.add_argument("key")
    p.add_argument("--lang", help="language to resolve in")
    p.add_argument("--case", choices=["upper", "lower", "capitalized"])

    p = sub.add_parser("add", help="add a key to every language")
    p.add_argument("key")
    p.add_argument("--set", action="append", metavar="CODE=TEXT", dest="values")

    p = sub.add_parser("edit", help="edit translations of an existing key")
    p.add_argument("key")
    p.add_argument("--set", action="append", metavar="CODE=TEXT", dest="values", required=True)

    p = sub.add_parser("delete", help="delete a key from every language")
    p.add_argument("key")

    sub.add_parser("sync", help="fill missing keys in secondary languages")

    p = sub.add_parser("switch", help="set the active language")
    p.add_argument("code")

    p = sub.add_parser("create", help="create a new language project")
    p.add_argument("name")
    p.add_argument("--language", action="append", dest="languages", required=True)
    p.add_argument("--main", help="main language (default: first --language)")
    p.add_argument("--root", default=".", help="directory to create the project in")

    return parser


# ── 子命令 ──────────────────────────────────────────────────────

def cmd_keys(args, storage: ProjectStorage, config: dict) -> int:
    from editor import LanguageEditor

    editor = LanguageEditor.open(storage)
    languages = editor.project.languages
    for key in editor.search_keys(args.search):
        values = editor.values_for(key)
        print(" | ".join([key] + [f"{code}: {values[code]}" for code in languages]))
    return 0


def cmd_show(args, storage: ProjectStorage, config: dict) -> int:
    catalog = open_catalog(storage, config)
    if args.lang:
        catalog.set_language(args.lang)
    lookup = {
        None: catalog.lang_string,
        "upper": catalog.lang_upper,
        "lower": catalog.lang_lower,
        "capitalized": catalog.lang_capitalized,
    }[args.case]
    print(lookup(args.key))
    return 0


def cmd_switch(args, storage: ProjectStorage, config: dict) -> int:
    catalog = open_catalog(storage, config)
    previous = catalog.current_language
    catalog.set_language(args.code)
    print(f"{previous} -> {catalog.current_language}")
    return 0


def cmd_edit_family(args, storage: ProjectStorage, config: dict) -> int:
    from editor import LanguageEditor

    editor = LanguageEditor.open(storage)
    if args.command == "add":
        editor.add_key(args.key, parse_assignments(args.values))
    elif args.command == "edit":
        editor.edit_key(args.key, parse_assignments(args.values))
    elif args.command == "delete":
        editor.delete_key(args.key)
    editor.persist(storage)
    return 0


def cmd_create(args, config: dict) -> int:
    from editor import ProjectDraft

    draft = ProjectDraft(args.name, args.languages)
    if args.main:
        draft.set_main_language(args.main)
    storage = draft.create(args.root)
    print(storage.project_dir)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """主入口"""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(args.log_level or (config.get("logging", {}) or {}).get("level", "INFO"))
    logger.info("Config loaded: %d sections", len(config))

    try:
        if args.command == "create":
            return cmd_create(args, config)

        storage = ProjectStorage(resolve_project_dir(args, config))
        handlers = {
            "keys": cmd_keys,
            "show": cmd_show,
            "switch": cmd_switch,
            "add": cmd_edit_family,
            "edit": cmd_edit_family,
            "delete": cmd_edit_family,
            "sync": cmd_edit_family,
        }
        return handlers[args.command](args, storage, config)
    except (LocalizationError, ValueError, argparse.ArgumentTypeError) as exc:
        logger.error("%s", exc)
        return 1
    finally:
        runtime.teardown()


if __name__ == "__main__":
    sys.exit(main())
