"""CLI entrypoint for xdo."""

from __future__ import annotations

from typing import List, Optional

import typer
from typer.core import TyperCommand

from core.errors import FatalError, UsageError
from executor.action_router import Action
from selection.criteria import FLAGS
from ui.cli import commands

__version__ = "0.1.0"

USAGE = "xdo ACTION [OPTIONS] [WID ...]"
_FLAGS_KEY = "xdo.criteria_flags"
_VALUE_OPTIONS = {"k"}

app = typer.Typer(add_completion=False, help="Apply window actions to selected X11 windows.")


def split_options(tokens: list[str]) -> tuple[list[str], list[str], list[str]]:
    """Split the tokens after ACTION the way getopt("rcCdDk:") reads them.

    Returns the tokens with every short option separated (``-cC`` becomes
    ``-c -C``), the criteria flags in command-line order, and warnings for
    options that are dropped.
    """
    normalized: list[str] = []
    criteria_flags: list[str] = []
    warnings: list[str] = []
    pending = iter(tokens)
    for token in pending:
        if token == "--":
            normalized.append(token)
            normalized.extend(pending)
            break
        if not token.startswith("-") or token == "-":
            normalized.append(token)
            continue
        if token.startswith("--"):
            warnings.append(f"Unknown option: '{token}'.")
            continue
        letters = token[1:]
        for i, letter in enumerate(letters):
            flag = f"-{letter}"
            if letter in _VALUE_OPTIONS:
                value = letters[i + 1:] or next(pending, None)
                if value is None:
                    warnings.append(f"Option requires an argument: '{flag}'.")
                else:
                    normalized.extend([flag, value])
                break
            if flag in FLAGS:
                normalized.append(flag)
                criteria_flags.append(flag)
            else:
                warnings.append(f"Unknown option: '{flag}'.")
    return normalized, criteria_flags, warnings


class XdoCommand(TyperCommand):
    """Reads ACTION from the first token before Click parses options."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        if args:
            first, rest = args[0], list(args[1:])
            if first == "-h":
                typer.echo(USAGE)
                ctx.exit(0)
            if first == "-v":
                typer.echo(__version__)
                ctx.exit(0)
            if first.startswith("-"):
                try:
                    Action.from_name(first)
                except UsageError as exc:
                    typer.echo(str(exc), err=True)
                    ctx.exit(1)
            normalized, criteria_flags, warnings = split_options(rest)
            for warning in warnings:
                typer.echo(warning, err=True)
            ctx.meta[_FLAGS_KEY] = criteria_flags
            args = [first, *normalized]
        return super().parse_args(ctx, args)


@app.command(cls=XdoCommand, context_settings={"help_option_names": []})
def run_cmd(
    ctx: typer.Context,
    action: Optional[str] = typer.Argument(
        None, metavar="ACTION", help="close, kill, hide, show, activate, key, button, -h or -v"
    ),
    window_ids: Optional[List[str]] = typer.Argument(None, metavar="[WID ...]", help="Explicit window IDs"),
    different_window: bool = typer.Option(False, "-r", help="Windows other than the active one"),
    same_class: bool = typer.Option(False, "-c", help="Same class as the active window"),
    different_class: bool = typer.Option(False, "-C", help="Different class from the active window"),
    same_desktop: bool = typer.Option(False, "-d", help="On the current desktop"),
    different_desktop: bool = typer.Option(False, "-D", help="Not on the current desktop"),
    event_code: str = typer.Option("0", "-k", metavar="CODE", help="Key or button code"),
) -> None:
    """Apply ACTION to explicit windows, the active window, or matching windows."""
    flags = list(ctx.meta.get(_FLAGS_KEY, []))
    try:
        commands.run_action(
            action_name=action,
            flags=flags,
            event_code=event_code,
            window_tokens=window_ids or [],
        )
    except FatalError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
