# smartcomplete/cli.py
"""
smartcomplete command-line interface.

Commands
--------
- ``complete INPUT``   print ranked suggestions for INPUT as a JSON array
- ``interactive``      prompt with TAB completion; entered lines are recorded
- ``history``          show the most recent history entries
- ``install``          write the default config and print shell setup steps
- ``uninstall``        remove the config file
- ``config show``      print the effective configuration
- ``config set K V``   update one configuration key

Design goals
------------
- Keep stdout of ``complete`` machine-readable; diagnostics go to stderr via
  the package logger.
- Convert configuration errors into friendly messages and non-zero exit codes
  instead of tracebacks.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import click
import yaml
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .completers import EngineCompleter
from .config import (
    ConfigError,
    Settings,
    coerce_value,
    load_config,
    remove_config,
    update_config,
)
from .constants import DEFAULT_CONFIG, RECENT_LIMIT
from .log_manager import get_logger
from .service import CompletionService

__all__ = ["cli", "main"]

console = Console()

PROMPT_HTML = "<ansicyan><b>!</b></ansicyan> "
_EXIT_WORDS = {"exit", "quit"}


def _build_service(settings: Settings) -> CompletionService:
    """Create the service used by every command (patched in tests)."""
    return CompletionService(settings=settings)


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostics level (default: $SMARTCOMPLETE_LOG_LEVEL or WARNING).",
)
@click.version_option(package_name="smartcomplete", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """
    Shell command auto-completion from a command catalog, your filesystem and
    your bash/zsh history.
    """
    get_logger(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", Settings.from_env())


@cli.command("complete")
@click.argument("text")
@click.pass_context
def complete(ctx: click.Context, text: str) -> None:
    """Print completions for TEXT as a JSON array."""
    service = _build_service(_settings(ctx))
    suggestions = asyncio.run(service.suggest(text))
    click.echo(json.dumps(suggestions))


@cli.command("interactive")
@click.pass_context
def interactive(ctx: click.Context) -> None:
    """Prompt for commands with TAB completion; entered lines go to history."""
    service = _build_service(_settings(ctx))
    asyncio.run(service.start())
    session: PromptSession = PromptSession(
        completer=EngineCompleter(service.engine),
        history=InMemoryHistory(),
        complete_while_typing=False,
    )

    console.print(Text("smartcomplete interactive mode", style="bold cyan"))
    console.print(Text("Type your commands and press TAB for completions.", style="yellow"))
    console.print(Text('Type "exit" to quit.\n', style="yellow"))

    while True:
        try:
            line = session.prompt(HTML(PROMPT_HTML))
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip().lower() in _EXIT_WORDS:
            break
        if line.strip():
            service.record(line)
            console.print(Text(f"Command recorded: {line.strip()}", style="dim"))


@cli.command("history")
@click.option("-n", "--count", default=RECENT_LIMIT, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def history(ctx: click.Context, count: int) -> None:
    """Show the most recent history entries (oldest first)."""
    service = _build_service(_settings(ctx))
    asyncio.run(service.start())
    entries = service.engine.get_history()[-count:]
    if not entries:
        console.print(Text("No history yet.", style="yellow"))
        return
    console.print(Text("Command History:", style="bold"))
    for idx, entry in enumerate(entries, start=1):
        console.print(f"{idx}: {entry}", markup=False, highlight=False)


@cli.command("install")
@click.pass_context
def install(ctx: click.Context) -> None:
    """Write the default configuration and print shell setup steps."""
    settings = _settings(ctx)
    try:
        load_config(settings.config_file, create=True)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    steps = Text()
    steps.append(f"Configuration: {settings.config_file}\n", style="cyan")
    steps.append(f"History file:  {settings.history_file}\n\n", style="cyan")
    steps.append("1. Put `smartcomplete` on your PATH (pip install .)\n")
    steps.append("2. Add to your shell profile (.bashrc, .zshrc):\n")
    steps.append('   export SMARTCOMPLETE="smartcomplete"\n', style="green")
    steps.append("3. Restart your shell or `source` the profile.\n\n")
    steps.append("Usage:\n", style="bold")
    steps.append('  smartcomplete complete "git st"   # get completions\n')
    steps.append("  smartcomplete interactive         # interactive mode\n")
    steps.append("  smartcomplete history             # view history\n")
    console.print(Panel(steps, title="smartcomplete install", border_style="cyan"))


@cli.command("uninstall")
@click.pass_context
def uninstall(ctx: click.Context) -> None:
    """Remove the configuration file."""
    path = _settings(ctx).config_file
    try:
        removed = remove_config(path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    if removed:
        console.print(Text(f"Configuration file removed: {path}", style="cyan"))
    else:
        console.print(Text("Configuration file not found", style="yellow"))


@cli.group("config")
def config_group() -> None:
    """Inspect or change the YAML configuration."""


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as YAML."""
    try:
        data = load_config(_settings(ctx).config_file, create=False)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)


@config_group.command("set")
@click.argument("key", type=click.Choice(sorted(k for k in DEFAULT_CONFIG if k != "shortcuts")))
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set KEY to VALUE (enabled, max_suggestions or history_size)."""
    try:
        coerced = coerce_value(key, value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc
    try:
        update_config(_settings(ctx).config_file, {key: coerced})
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(Text("Configuration updated successfully", style="green"))


@config_group.command("shortcut")
@click.argument("alias")
@click.argument("expansion", required=False)
@click.pass_context
def config_shortcut(ctx: click.Context, alias: str, expansion: Optional[str]) -> None:
    """Add ALIAS ➜ EXPANSION, or remove ALIAS when EXPANSION is omitted."""
    path = _settings(ctx).config_file
    try:
        shortcuts = dict(load_config(path, create=False).get("shortcuts") or {})
        if expansion:
            shortcuts[alias] = expansion
        elif shortcuts.pop(alias, None) is None:
            raise click.ClickException(f"No shortcut named {alias!r}")
        update_config(path, {"shortcuts": shortcuts})
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(Text("Configuration updated successfully", style="green"))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
