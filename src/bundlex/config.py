"""
配置管理模块

查找顺序：
1) 明确指定的 config_path
2) 工作目录下的 "bundlex.toml"
3) 工作目录或父目录中 "pyproject.toml" 的 [tool.bundlex]
4) 内置默认值
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

CONFIG_FILENAME = "bundlex.toml"
_PYPROJECT_SEARCH_DEPTH = 5


def _normalize_exts(exts) -> List[str]:
    """规范化扩展名（转小写并补全前导点），保持原有顺序并去重。"""
    norm: List[str] = []
    for e in exts:
        e = str(e).strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        if e not in norm:
            norm.append(e)
    return norm


@dataclass
class BundlexConfig:
    """bundlex 运行配置"""

    extensions: List[str] = field(default_factory=lambda: [".bundle"])
    recursive: bool = False
    require_complete: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]], source: Optional[str] = None) -> "BundlexConfig":
        """从 TOML 数据构建配置；类型或取值不合法的项记录警告并保留默认值。"""
        cfg = cls(source=source)
        if not data:
            return cfg
        known = {f.name for f in fields(cls)} - {"source"}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"忽略未知配置项: {key}")
                continue
            checked = _VALIDATORS[key](value)
            if checked is None:
                logger.warning(f"配置项 {key} 的值无效，使用默认值: {value!r}")
                continue
            setattr(cfg, key, checked)
        return cfg

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "extensions": list(self.extensions),
            "recursive": self.recursive,
            "require_complete": self.require_complete,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def _check_extensions(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(e, str) for e in value):
        return None
    return _normalize_exts(value) or None


def _check_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _check_log_level(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    level = value.strip().upper()
    try:
        logger.level(level)
    except ValueError:
        return None
    return level


def _check_log_file(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


_VALIDATORS = {
    "extensions": _check_extensions,
    "recursive": _check_bool,
    "require_complete": _check_bool,
    "log_level": _check_log_level,
    "log_file": _check_log_file,
}


def _try_load_toml(path: Path) -> Optional[Dict[str, Any]]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"读取配置文件失败，已跳过: {path} ({e})")
        return None


def load_config(config_path: Optional[str] = None, cwd: Optional[str] = None) -> BundlexConfig:
    """按查找顺序加载配置，任何来源失败都会回退到下一个来源。"""
    base = Path(cwd or os.getcwd())

    if config_path:
        data = _try_load_toml(Path(config_path))
        if data is not None:
            return BundlexConfig.from_mapping(data, source=str(config_path))

    local = base / CONFIG_FILENAME
    if local.is_file():
        data = _try_load_toml(local)
        if data is not None:
            return BundlexConfig.from_mapping(data, source=str(local))

    cur = base
    for _ in range(_PYPROJECT_SEARCH_DEPTH):
        pp = cur / "pyproject.toml"
        if pp.is_file():
            project = _try_load_toml(pp)
            section = (project or {}).get("tool", {}).get("bundlex")
            if isinstance(section, dict):
                return BundlexConfig.from_mapping(section, source=f"{pp}[tool.bundlex]")
        if cur.parent == cur:
            break
        cur = cur.parent

    return BundlexConfig()
