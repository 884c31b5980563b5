"""Command-line interface for EditML."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from editml.errors import Issue
from editml.resolve import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

CONFIG_NAME = "editml.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    max_depth: int
    strip_comments: bool
    strict: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="editml",
        description="Render the Clean View of an EditML document",
    )
    p.add_argument("input", nargs="?", default=None, help="Input file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help=f"Structural block nesting limit (default: {DEFAULT_MAX_DEPTH})",
    )
    p.add_argument(
        "--strip-comments",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remove %%%% debug-comment lines before parsing (default: on)",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Exit with status 1 on warnings too",
    )
    p.add_argument("--debug", action="store_true", help="Dump nodes and issues to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = None
    if args.input and args.input != "-":
        input_file = Path(args.input)

    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    max_depth = DEFAULT_MAX_DEPTH
    strip_comments = True
    cfg_render = config.get("render")
    if isinstance(cfg_render, dict):
        cfg_depth = cfg_render.get("max_depth")
        if cfg_depth is not None:
            if not isinstance(cfg_depth, int) or isinstance(cfg_depth, bool):
                raise argparse.ArgumentTypeError(
                    f"render.max_depth must be an integer, got {cfg_depth!r}"
                )
            max_depth = cfg_depth
        cfg_strip = cfg_render.get("strip_comments")
        if isinstance(cfg_strip, bool):
            strip_comments = cfg_strip

    strict = False
    cfg_issues = config.get("issues")
    if isinstance(cfg_issues, dict):
        cfg_strict = cfg_issues.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict

    if args.max_depth is not None:
        max_depth = args.max_depth
    if args.strip_comments is not None:
        strip_comments = args.strip_comments
    if args.strict is not None:
        strict = args.strict

    if max_depth < 1:
        raise argparse.ArgumentTypeError(f"max depth must be at least 1, got {max_depth}")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        max_depth=max_depth,
        strip_comments=strip_comments,
        strict=strict,
        debug=args.debug,
        verbose=args.verbose,
    )


def read_source(options: CliOptions) -> str:
    if options.input_file is None:
        return sys.stdin.read()
    return options.input_file.read_text(encoding="utf-8")


def compile_source(source: str, options: CliOptions) -> tuple[str, list[Issue]]:
    """Parse and render *source*, returning (clean view, issues).

    Issue positions refer to lines of *source* as read from the input.
    """
    from editml.debug import dump_issues, dump_nodes
    from editml.parser import parse
    from editml.render import render_clean_view

    filename = str(options.input_file) if options.input_file else "<stdin>"

    nodes, parse_issues = parse(source, filename, strip_comments=options.strip_comments)
    if options.debug:
        print("--- nodes ---", file=sys.stderr)
        dump_nodes(nodes)

    text, render_issues = render_clean_view(nodes, max_depth=options.max_depth)
    issues = parse_issues + render_issues
    if options.debug:
        print("--- issues ---", file=sys.stderr)
        dump_issues(issues)

    return text, issues


def exit_code(issues: list[Issue], strict: bool) -> int:
    """0 when clean, 1 on any error (or any issue at all when strict)."""
    if any(issue.is_error for issue in issues):
        return 1
    if strict and issues:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = read_source(options)
    except OSError as exc:
        print(f"error: cannot read input: {exc}", file=sys.stderr)
        return 2

    text, issues = compile_source(source, options)
    filename = str(options.input_file) if options.input_file else "<stdin>"
    for issue in issues:
        print(issue.format(source, filename), file=sys.stderr)

    code = exit_code(issues, options.strict)
    if any(issue.is_error for issue in issues):
        logger.debug("not writing output: document could not be rendered")
        return code

    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return code
