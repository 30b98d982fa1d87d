"""BrainMux CLI 入口

面向运维的检查命令：查看注册表、合并输出文件、检查一致性。
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from brainmux.aggregator import BrainOutput, ConsistencyChecker, OutputMerger
from brainmux.core.config import get_settings
from brainmux.core.exceptions import RegistryError
from brainmux.core.logging import setup_logging
from brainmux.registry import BrainRegistry


class RawOutput(BaseModel):
    """输出文件中的单条记录（质量可为 0-1 或 0-100）"""

    source: str
    content: str | None = None
    quality: float = Field(default=0.0, ge=0.0)


app = typer.Typer(
    name="brainmux",
    help="BrainMux - 多 Brain 选择与输出聚合",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="详细模式：显示 DEBUG 日志"),
    ] = False,
):
    """BrainMux CLI

    示例:
        brainmux registry
        brainmux merge outputs.json --user alice
        brainmux consistency outputs.json
    """
    setup_logging("DEBUG" if verbose else get_settings().log_level)


def load_outputs(path: Path) -> list[BrainOutput]:
    """读取 JSON 数组格式的输出文件

    Raises:
        typer.BadParameter: 文件不存在或格式无效
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise typer.BadParameter(f"{path} 必须是 JSON 数组")
        records = [RawOutput.model_validate(item) for item in data]
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise typer.BadParameter(f"无法读取输出文件 {path}: {e}") from e
    return [BrainOutput.from_raw(r.source, r.content, r.quality) for r in records]


@app.command()
def registry(
    path: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="注册表 JSON 文件（默认按配置）"),
    ] = None,
):
    """显示 Brain 注册表"""
    try:
        reg = BrainRegistry.from_file(path) if path else BrainRegistry.from_settings()
    except RegistryError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title=f"Brain 注册表 ({len(reg)})")
    table.add_column("Brain", style="cyan")
    table.add_column("核心", justify="center")
    table.add_column("顺序", justify="right")
    table.add_column("复杂度", justify="right")
    table.add_column("耗时(ms)", justify="right")
    table.add_column("描述", style="dim")

    for brain_id in reg.sort_by_order(reg.brain_ids):
        profile = reg.get(brain_id)
        description = profile.description if profile else ""
        table.add_row(
            brain_id,
            "✓" if reg.is_core(brain_id) else "",
            str(reg.order_of(brain_id)),
            str(reg.complexity_of(brain_id)),
            str(reg.latency_of(brain_id)),
            description[:60] + ("..." if len(description) > 60 else ""),
        )
    console.print(table)


@app.command()
def merge(
    path: Annotated[Path, typer.Argument(help="输出文件（JSON 数组）")],
    user: Annotated[str | None, typer.Option("--user", "-u", help="用户标识")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="以 JSON 输出")] = False,
):
    """合并输出文件并显示统一响应"""
    outputs = load_outputs(path)
    merger = OutputMerger()
    response = merger.create_unified_response(outputs, user)

    if as_json:
        console.print_json(data={
            "user_id": response.user_id,
            "content": response.content,
            "quality": response.quality,
            "sources": response.sources,
            "created_at_ms": response.created_at_ms,
            "conflicts": [list(c) for c in response.conflicts],
        })
        return

    console.print(Panel(response.content or "[dim](空)[/dim]", title="统一响应"))
    console.print(f"质量: [bold]{response.quality:.2f}[/bold]")
    console.print(f"来源: {', '.join(response.sources) or '-'}")
    for preferred, other in response.conflicts:
        console.print(f"[yellow]冲突[/yellow]: 采用 {preferred}，而非 {other}")


@app.command()
def consistency(
    path: Annotated[Path, typer.Argument(help="输出文件（JSON 数组）")],
):
    """检查输出间一致性并显示质量统计"""
    outputs = load_outputs(path)
    report = ConsistencyChecker().check(outputs)
    stats = OutputMerger().merger_statistics(outputs)

    status = "[green]一致[/green]" if report.is_consistent else "[red]不一致[/red]"
    console.print(f"平均相似度: {report.average_similarity:.2f} ({status})")
    for item in report.inconsistencies:
        console.print(f"  - {item}")

    if stats is None:
        console.print("[dim]没有输出[/dim]")
        return

    table = Table(title="质量统计")
    table.add_column("输出数", justify="right")
    table.add_column("平均", justify="right")
    table.add_column("最高", justify="right")
    table.add_column("最低", justify="right")
    table.add_row(
        str(stats.count),
        f"{stats.average:.2f}",
        f"{stats.maximum:.2f}",
        f"{stats.minimum:.2f}",
    )
    console.print(table)


if __name__ == "__main__":
    app()
