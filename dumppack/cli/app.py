import json
from importlib.metadata import PackageNotFoundError, version as package_version
import logging
from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Any, NoReturn

import typer

from dumppack.config import ConfigError, DumpKitConfig, resolve_config
from dumppack.core.values import Object, to_python
from dumppack.diff import (
    DumpDiffResult,
    diff_values,
    render_diff_report,
    render_diff_summary,
)
from dumppack.io import DumpReadError, read_dump_text
from dumppack.parse import ParseError, ParseOptions, parse
from dumppack.timing import time_tracker

app = typer.Typer(help="dumpkit CLI")

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("dumpkit")
    except PackageNotFoundError:
        from dumpkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show dumpkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log parser decisions and phase timings to stderr.",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _fail(command: str, error: Exception, *, json_output: bool, extra: dict[str, Any]) -> NoReturn:
    message = f"{command} failed: {error}"
    if json_output:
        _echo_json(
            {
                "status": "error",
                "exit_code": 1,
                "message": message,
                **extra,
            }
        )
    else:
        _echo(message, err=True)
    raise typer.Exit(code=1) from error


def _load_config(
    config_path: Path | None,
    *,
    strict: bool | None,
    bare_entries_key: str | None,
    max_changes: int | None = None,
) -> DumpKitConfig:
    config = resolve_config(config_path)
    return config.with_overrides(
        strict=strict,
        bare_entries_key=bare_entries_key,
        max_changes=max_changes,
    )


def _read_source(source: str, *, inline: bool) -> str:
    if inline:
        return source
    return read_dump_text(Path(source))


def _parse_source(source: str, *, inline: bool, options: ParseOptions) -> Object:
    label = "inline dump" if inline else source
    stop = time_tracker(f"parse {label}", log=logger)
    parsed = parse(_read_source(source, inline=inline), options=options)
    stop()
    return parsed


@app.command(name="parse")
def parse_command(
    source: str = typer.Argument(..., help="Path to a dump file (.zst accepted), or dump text with --text."),
    text: bool = typer.Option(
        False,
        "--text",
        help="Treat SOURCE as the dump text itself instead of a path.",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail on unbalanced brackets (or force permissive parsing over config).",
    ),
    bare_entries_key: str | None = typer.Option(
        None,
        "--bare-entries-key",
        help="Collect unkeyed record entries under this key instead of dropping them.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to JSON dumpkit config (defaults to $DUMPKIT_CONFIG).",
    ),
) -> None:
    """Parse one dump and print it as JSON."""
    try:
        config = _load_config(config_path, strict=strict, bare_entries_key=bare_entries_key)
        parsed = _parse_source(source, inline=text, options=config.parse_options())
    except (ConfigError, DumpReadError, FileNotFoundError, ParseError) as error:
        _fail("parse", error, json_output=False, extra={})

    _echo_json(to_python(parsed))


@app.command()
def diff(
    left: str = typer.Argument(..., help="First dump path (or text with --text)."),
    right: str = typer.Argument(..., help="Second dump path (or text with --text)."),
    text: bool = typer.Option(
        False,
        "--text",
        help="Treat LEFT and RIGHT as dump text instead of paths.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    max_changes: int | None = typer.Option(
        None,
        "--max-changes",
        help="Maximum number of differences to print in text mode.",
    ),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail on unbalanced brackets (or force permissive parsing over config).",
    ),
    bare_entries_key: str | None = typer.Option(
        None,
        "--bare-entries-key",
        help="Collect unkeyed record entries under this key instead of dropping them.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to JSON dumpkit config (defaults to $DUMPKIT_CONFIG).",
    ),
    exit_code: bool = typer.Option(
        False,
        "--exit-code",
        help="Exit with status 1 when the dumps differ.",
    ),
) -> None:
    """Diff two dumps and report every divergence by path."""
    paths = {
        "left_path": None if text else left,
        "right_path": None if text else right,
    }
    try:
        config = _load_config(
            config_path,
            strict=strict,
            bare_entries_key=bare_entries_key,
            max_changes=max_changes,
        )
        options = config.parse_options()
        first = _parse_source(left, inline=text, options=options)
        second = _parse_source(right, inline=text, options=options)
    except (ConfigError, DumpReadError, FileNotFoundError, ParseError) as error:
        _fail("diff", error, json_output=json_output, extra=paths)

    stop = time_tracker("diff", log=logger)
    result = DumpDiffResult(first=first, second=second, diffs=diff_values(first, second))
    stop()

    status_code = 1 if exit_code and not result.identical else 0

    if json_output:
        _echo_json(
            {
                **result.to_dict(),
                "status": "ok",
                "exit_code": status_code,
                "message": "diff completed",
                **paths,
            }
        )
    else:
        _echo(render_diff_summary(result))
        _echo(render_diff_report(result, max_changes=config.max_changes))

    if status_code:
        raise typer.Exit(code=status_code)


def main() -> None:
    app()
