from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .config import OutputConfig
from .errors import ArgumentError, FogetError
from .operations import Action, MutationResult, Result, SearchResult, ShowResult


def make_console(config: OutputConfig, *, stderr: bool = False) -> Console:
    """Console honouring the colour choice; user text is never treated as emoji codes."""
    return Console(
        stderr=stderr,
        no_color=not config.color,
        color_system="auto" if config.color else None,
        highlight=False,
        emoji=False,
    )


def _tag_list(tags: list[str]) -> str:
    return "[" + ", ".join(f'"{t}"' for t in tags) + "]"


def render_mutation(result: MutationResult, console: Console) -> None:
    cmd = escape(result.command)
    if result.action is Action.DELETE:
        if result.tag is None:
            console.print(f'[red]Deleted[/red] command "[bold]{cmd}[/bold]".', soft_wrap=True)
        else:
            console.print(
                f'[red]Deleted[/red] tag "{escape(result.tag)}" from command "[bold]{cmd}[/bold]".',
                soft_wrap=True,
            )
        return
    console.print(f'[green]Added[/green] tag "{escape(result.tag or "")}" to command "[bold]{cmd}[/bold]".', soft_wrap=True)
    if result.tags is not None:
        console.print(f"[bold]{cmd}[/bold] -- {escape(_tag_list(result.tags))}", soft_wrap=True)


def render_show(result: ShowResult, console: Console) -> None:
    # absent command: silent on purpose, mirrors the historical behaviour
    if not result.found:
        return
    console.print(f"Found descriptions for command `[bold cyan]{escape(result.command)}[/bold cyan]`:", soft_wrap=True)
    for i, tag in enumerate(result.tags or [], start=1):
        console.print(f"\t[dim]{i}.[/dim] {escape(tag)}", soft_wrap=True)


def render_search(result: SearchResult, console: Console) -> None:
    console.print("Commands with matching functionality:", soft_wrap=True)
    for name, tags in result.matches:
        console.print(f"[bold cyan]{escape(name)}[/bold cyan] -- {escape(_tag_list(tags))}", soft_wrap=True)


def render_result(result: Result, console: Console) -> None:
    if isinstance(result, MutationResult):
        render_mutation(result, console)
    elif isinstance(result, ShowResult):
        render_show(result, console)
    elif isinstance(result, SearchResult):
        render_search(result, console)


def render_error(exc: FogetError, console: Console, usage: str | None = None) -> None:
    console.print(f"[bold red]foget:[/bold red] {escape(str(exc))}", soft_wrap=True)
    if usage and isinstance(exc, ArgumentError):
        console.print(escape(usage.rstrip()), soft_wrap=True)
