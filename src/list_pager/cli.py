"""
Command-line interface for the list pager.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml
from rich.console import Console

from list_pager.canvas import Canvas
from list_pager.config import PagerConfig, default_config_paths
from list_pager.events import KeypressEvent
from list_pager.logging import get_logger, setup_logging
from list_pager.pager import ListPager
from list_pager.store import Item
from list_pager.terminal import TerminalInput

console = Console()
logger = get_logger("cli")

DEMO_SITES = [
    ("http://google.com", "Google"),
    ("http://yahoo.com", "Yahoo"),
    ("http://cloudup.com", "Cloudup"),
    ("http://github.com", "Github"),
]

# Commands that draw the list and so must not log to stderr
INTERACTIVE_COMMANDS = ("demo", "pick")
DEFAULT_LOG_FILE = "list-pager.log"


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scrollable interactive terminal list",
        prog="list-pager",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Config file (default: search list-pager.yaml locations)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to this file (default: stderr, list-pager.log for demo and pick)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Demo command
    subparsers.add_parser("demo", help="Browse a sample list (j/k move, r remove, q quit)")

    # Pick command
    pick_parser = subparsers.add_parser("pick", help="Pick one line and print it")
    pick_parser.add_argument("items", nargs="*", help="Items to choose from")
    pick_parser.add_argument(
        "-f",
        "--file",
        type=Path,
        help="Read items from a file, one per line",
    )

    # Config command with subcommands
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")
    config_subparsers.add_parser("show", help="Show current configuration")
    config_init_parser = config_subparsers.add_parser("init", help="Initialize a new config file")
    config_init_parser.add_argument(
        "-o",
        "--output",
        default="list-pager.yaml",
        help="Output file path",
    )
    config_subparsers.add_parser("path", help="Show config file paths")

    args = parser.parse_args(argv)

    log_file = args.log_file
    if log_file is None and args.command in INTERACTIVE_COMMANDS:
        # stderr shares the terminal the list is drawn on
        log_file = DEFAULT_LOG_FILE

    if getattr(args, "verbose", False):
        setup_logging("DEBUG", file=log_file)
    else:
        setup_logging("WARNING", file=log_file)

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "pick":
        cmd_pick(args)
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


def _load_config(path: Path | None) -> PagerConfig:
    """Load configuration, exiting with a message when it is unusable."""
    try:
        config, loaded_from = PagerConfig.discover(path)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        sys.exit(1)
    if loaded_from is not None:
        logger.debug("Loaded config from %s", loaded_from)
    return config


def _create_pager(
    config: PagerConfig,
    canvas: Canvas | None = None,
    input: TerminalInput | None = None,
) -> ListPager:
    """Create a pager from CLI options."""
    return ListPager(config=config, canvas=canvas, input=input)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


def setup_demo(pager: ListPager) -> None:
    """
    Fill *pager* with the sample sites and install the demo key handlers.
    """
    pager.add_header("title", "Sites  (j/k: move  r: remove  q: quit)")
    pager.add_header("status", "")

    def show_status(_event: object = None) -> None:
        page, pages = pager.page_info()
        item = pager.selected_item
        where = item.id if item is not None else "-"
        pager.update_header("status", f"Page {page}/{pages}  {where}")

    def on_key(event: KeypressEvent) -> None:
        name = event.key.name
        if name == "r" and pager.selected is not None:
            pager.remove_item()
            # removing the first row leaves nothing selected
            if pager.selected is None and len(pager):
                pager.select_item(pager.item_at(0).id)
        elif name == "j":
            pager.down()
        elif name == "k":
            pager.up()
        elif name == "q":
            pager.stop()

    pager.on("select", show_status)
    pager.on("remove", show_status)
    pager.on("empty", lambda _e: pager.update_header("status", "Empty"))
    pager.on("keypress", on_key)

    for id, label in DEMO_SITES:
        pager.add_item(id, label)


def cmd_demo(args: argparse.Namespace) -> None:
    """Browse the sample list."""
    pager = _create_pager(_load_config(args.config))
    setup_demo(pager)
    pager.run()

    item = pager.selected_item
    if item is None:
        console.print("[dim]No selection.[/dim]")
    else:
        console.print(f"[bold]{item.label}[/bold] [dim]{item.id}[/dim]")


# ---------------------------------------------------------------------------
# pick
# ---------------------------------------------------------------------------


@dataclass
class PickResult:
    """The item chosen with Enter, if any."""

    choice: Item | None = None


def setup_pick(pager: ListPager, labels: list[str]) -> PickResult:
    """
    Add *labels* as items and bind Enter to choose, q or Escape to cancel.
    """
    result = PickResult()

    def on_key(event: KeypressEvent) -> None:
        name = event.key.name
        if name == "enter":
            result.choice = pager.selected_item
            pager.stop()
        elif name in ("q", "escape"):
            pager.stop()

    pager.on("keypress", on_key)
    for index, label in enumerate(labels):
        pager.add_item(index, label)
    return result


def _read_labels(args: argparse.Namespace) -> list[str]:
    labels = list(args.items)
    if args.file is not None:
        try:
            text = args.file.read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]Cannot read {args.file}: {e}[/red]")
            sys.exit(1)
        labels.extend(line for line in text.splitlines() if line.strip())
    return labels


def cmd_pick(args: argparse.Namespace) -> None:
    """Pick one item and print its label."""
    labels = _read_labels(args)
    if not labels:
        console.print("[yellow]Nothing to pick from.[/yellow]")
        sys.exit(1)

    pager = _create_pager(_load_config(args.config))
    result = setup_pick(pager, labels)
    pager.run()

    if result.choice is None:
        sys.exit(1)
    console.print(result.choice.label, markup=False, highlight=False)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


def cmd_config(args: argparse.Namespace) -> None:
    """Configuration management commands."""
    if args.config_command == "show":
        _config_show(args.config)
    elif args.config_command == "init":
        _config_init(args.output)
    elif args.config_command == "path":
        _config_path()
    else:
        console.print("[yellow]Usage: list-pager config <show|init|path>[/yellow]")


def _config_show(path: Path | None) -> None:
    """Show current configuration."""
    try:
        config, loaded_from = PagerConfig.discover(path)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        console.print(f"[red]Failed to load config: {e}[/red]")
        sys.exit(1)

    if loaded_from is None:
        console.print("[dim]No config file found. Using defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from: {loaded_from}[/dim]\n")

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(
        yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True),
        markup=False,
    )


def _config_init(output: str) -> None:
    """Initialize a new config file."""
    output_path = Path(output)

    if output_path.exists():
        console.print(f"[red]File already exists: {output_path}[/red]")
        sys.exit(1)

    default_config = PagerConfig().to_dict()
    default_config["keybindings"] = {
        "up": ["up", "k"],
        "down": ["down", "j"],
        "exit": ["ctrl+c"],
    }

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    console.print(f"[green]Created config file: {output_path}[/green]")


def _config_path() -> None:
    """Show config file search paths."""
    console.print("[bold]Config file search paths:[/bold]\n")

    names = ["Current directory", "User config"]
    for name, path in zip(names, default_config_paths()):
        exists = "[green]✓[/green]" if path.exists() else "[dim]·[/dim]"
        console.print(f"  {exists} {name}: {path}")


if __name__ == "__main__":
    main()
