"""Display helpers for CLI output."""

from rich.markup import escape
from rich.tree import Tree

from ..core.models import SatisfierResult, total_mcs
from .app import console


def _format_mcs(value: float) -> str:
    return f"{value:g} MCs"


def _node_label(result: SatisfierResult) -> str:
    icon = "[green]✓[/green]" if result.satisfied else "[red]✗[/red]"
    label = f"{icon} {escape(result.ref or result.kind)}"
    detail = f"{len(result.assigned)} modules, {_format_mcs(total_mcs(result.assigned))}"
    if result.kind == "filter":
        detail = f"counts {detail}"
    return f"{label} [dim]({detail})[/dim]"


def _is_noise(result: SatisfierResult, show_infos: bool) -> bool:
    """Block info leaves with nothing to show."""
    if result.kind != "constraint" or not result.ref.endswith("/info"):
        return False
    return not (show_infos and result.infos)


def build_result_tree(result: SatisfierResult, show_infos: bool = True) -> Tree:
    """Build a rich Tree mirroring a satisfier result."""
    tree = Tree(_node_label(result))
    _add_children(tree, result, show_infos)
    return tree


def _add_children(tree: Tree, result: SatisfierResult, show_infos: bool) -> None:
    if result.satisfied and show_infos and not result.results:
        for info in result.infos:
            tree.add(f"[cyan]ℹ {escape(info)}[/cyan]")

    for child in result.results:
        if _is_noise(child, show_infos):
            continue
        node = tree.add(_node_label(child))
        if child.kind == "constraint" and not child.satisfied and child.messages:
            node.add(f"[red]{escape(child.messages[0])}[/red]")
        _add_children(node, child, show_infos)


def display_result(block_id: str, result: SatisfierResult, show_infos: bool = True) -> None:
    """Print the evaluation outcome for a block."""
    console.print()
    if result.satisfied:
        console.print(f"[bold green]Requirements of '{escape(block_id)}' are met[/bold green]")
    else:
        console.print(f"[bold red]Requirements of '{escape(block_id)}' are not met[/bold red]")
    console.print()
    console.print(build_result_tree(result, show_infos=show_infos))
    console.print()
