"""
bundlex 命令行接口 - 使用Typer实现
"""

import os
from pathlib import Path, PureWindowsPath
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .config import BundlexConfig, load_config
from .grouping import filter_bundles, group_bundles, save_groups_to_json
from .parser import BundleKind, BundleNameParser
from .utils import setup_logger

app = typer.Typer(
    help="按角色与变体整理 live2d 资源包文件名",
    add_completion=False,
)

console = Console()


def _init(config_path: Optional[str]) -> BundlexConfig:
    cfg = load_config(config_path)
    log = setup_logger("bundlex", level=cfg.log_level, log_file=cfg.log_file, force=True)
    if cfg.source:
        log.info(f"使用配置: {cfg.source}")
    return cfg


def _list_directory(directory: str, cfg: BundlexConfig) -> List[str]:
    """列出目录中符合扩展名的文件名（仅文件名，不含路径）"""
    names: List[str] = []
    root = Path(directory)
    entries = root.rglob("*") if cfg.recursive else root.iterdir()
    for entry in sorted(entries):
        if entry.is_file() and entry.suffix.lower() in cfg.extensions:
            names.append(entry.name)
    return names


def _read_clipboard() -> List[str]:
    import pyperclip

    content = pyperclip.paste().strip()
    if not content:
        return []
    return [p.strip() for p in content.replace("\r\n", "\n").split("\n") if p.strip()]


def _collect_names(
    names: Optional[List[str]],
    directory: Optional[str],
    list_file: Optional[str],
    clipboard: bool,
    cfg: BundlexConfig,
) -> List[str]:
    all_names = list(names) if names else []

    if directory:
        if not os.path.isdir(directory):
            console.print(f"[red]❌ 目录不存在: {directory}[/red]")
            raise typer.Exit(code=1)
        all_names.extend(_list_directory(directory, cfg))

    if list_file:
        if not os.path.isfile(list_file):
            console.print(f"[red]❌ 列表文件不存在: {list_file}[/red]")
            raise typer.Exit(code=1)
        text = Path(list_file).read_text(encoding="utf-8")
        all_names.extend(line.strip().strip('"').strip("'") for line in text.splitlines() if line.strip())

    if clipboard:
        clipboard_names = _read_clipboard()
        if clipboard_names:
            typer.echo(f"从剪贴板读取到 {len(clipboard_names)} 个文件名")
            all_names.extend(clipboard_names)
        else:
            console.print("[yellow]剪贴板中没有发现有效文件名[/yellow]")

    # 同时去掉 Windows 与 POSIX 路径前缀
    return [PureWindowsPath(n).name for n in all_names]


@app.command()
def parse(
    names: List[str] = typer.Argument(..., help="要解析的文件名"),
    config: Optional[str] = typer.Option(None, "--config", "-C", help="TOML 配置文件路径"),
):
    """解析文件名，显示角色名与变体编号"""
    _init(config)
    table = Table(title="解析结果")
    table.add_column("文件名", overflow="fold")
    table.add_column("有效", justify="center")
    table.add_column("类型")
    table.add_column("角色")
    table.add_column("变体", justify="right")
    table.add_column("标识")
    for name in names:
        ok, parser = BundleNameParser.try_parse(name)
        if ok:
            table.add_row(name, "[green]✓[/green]", parser.kind.value, parser.character_name, parser.variant_id, str(parser))
        else:
            table.add_row(name, "[red]✗[/red]", "-", "-", "-", str(parser))
    console.print(table)


@app.command()
def group(
    names: List[str] = typer.Argument(None, help="文件名列表"),
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="从目录读取文件名"),
    list_file: Optional[str] = typer.Option(None, "--list-file", "-l", help="从文本文件读取文件名（每行一个）"),
    clipboard: bool = typer.Option(False, "--clipboard", "-c", help="从剪贴板读取文件名"),
    json_out: Optional[str] = typer.Option(None, "--json", help="将分组结果写入 JSON 文件"),
    complete_only: Optional[bool] = typer.Option(None, "--complete-only/--all", help="只显示 art/animation/prefab 齐全的分组"),
    config: Optional[str] = typer.Option(None, "--config", "-C", help="TOML 配置文件路径"),
):
    """按角色与变体分组资源包"""
    cfg = _init(config)
    all_names = _collect_names(names, directory, list_file, clipboard, cfg)
    if not all_names:
        console.print("[yellow]没有提供任何文件名[/yellow]")
        return

    result = group_bundles(all_names)
    only_complete = cfg.require_complete if complete_only is None else complete_only
    groups = result.complete_groups() if only_complete else result.groups

    tree = Tree(f"分组: {len(groups)} 组 / {len(all_names)} 个文件")
    for grp in groups.values():
        style = "green" if grp.is_complete else "yellow"
        gnode = tree.add(f"[{style}]{grp.full_identifier}[/{style}]")
        for kind in BundleKind:
            for fn in grp.members(kind):
                gnode.add(f"[dim]{kind.value}[/dim] {fn}")
        missing = grp.missing_kinds()
        if missing:
            gnode.add(f"[dim]缺少: {', '.join(k.value for k in missing)}[/dim]")
    if result.unmatched:
        unode = tree.add(f"[red]未识别 ({len(result.unmatched)})[/red]")
        for fn in result.unmatched:
            unode.add(fn)
    console.print(tree)

    if json_out:
        save_groups_to_json(result, json_out)
        console.print(f"[green]已写入: {json_out}[/green]")


@app.command()
def match(
    character: str = typer.Argument(..., help="角色名（不区分大小写）"),
    variant: str = typer.Argument(..., help="变体编号"),
    names: List[str] = typer.Argument(None, help="文件名列表"),
    directory: Optional[str] = typer.Option(None, "--dir", "-d", help="从目录读取文件名"),
    list_file: Optional[str] = typer.Option(None, "--list-file", "-l", help="从文本文件读取文件名（每行一个）"),
    clipboard: bool = typer.Option(False, "--clipboard", "-c", help="从剪贴板读取文件名"),
    config: Optional[str] = typer.Option(None, "--config", "-C", help="TOML 配置文件路径"),
):
    """列出属于指定角色与变体的资源包"""
    cfg = _init(config)
    all_names = _collect_names(names, directory, list_file, clipboard, cfg)
    matched = filter_bundles(all_names, character, variant)
    if not matched:
        console.print(f"[yellow]没有找到 {character}_{variant} 的资源包[/yellow]")
        return
    for fn in matched:
        typer.echo(fn)


if __name__ == "__main__":
    app()
