"""
bundlex - live2d 资源包文件名解析与分组工具

主要模块：
- parser: 从资源包文件名中提取角色名与变体编号
- grouping: 将同一角色/变体的 art、animation、prefab 资源包归为一组
- config: TOML 配置加载
- cli: Typer 命令行接口

使用方法：
    from bundlex import BundleNameParser
    ok, parser = BundleNameParser.try_parse("art_live2d_characters_alice_07.bundle")
"""

from .grouping import BundleGroup, GroupingResult, filter_bundles, group_bundles, save_groups_to_json
from .parser import (
    NAMING_CONVENTIONS,
    BundleKind,
    BundleName,
    BundleNameParser,
    InvalidBundleName,
    ParsedBundleName,
    parse,
    try_parse,
)

__version__ = "0.1.0"

__all__ = [
    "NAMING_CONVENTIONS",
    "BundleGroup",
    "BundleKind",
    "BundleName",
    "BundleNameParser",
    "GroupingResult",
    "InvalidBundleName",
    "ParsedBundleName",
    "filter_bundles",
    "group_bundles",
    "parse",
    "save_groups_to_json",
    "try_parse",
]
