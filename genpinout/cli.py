"""CLI for the pinout diagram renderer.

Usage:
    genpinout render board.csv [board.svg] [--overwrite] [--png] [--strict]
    genpinout themes board.csv
    genpinout stats board.csv

Every subcommand accepts ``--config genpinout.yaml`` and ``--log-level``.
"""

from __future__ import annotations

import argparse
import itertools
import sys
from pathlib import Path

from genpinout.commands import parse_csv_file
from genpinout.commands.models import BeginDraw
from genpinout.config import GenPinoutConfig
from genpinout.errors import GenPinoutError
from genpinout.observability.logging import setup_logging
from genpinout.observability.metrics import RenderMetrics
from genpinout.render.renderer import PinoutRenderer
from genpinout.store import default_output_path, save_png, save_svg


def _load_config(args: argparse.Namespace) -> GenPinoutConfig:
    config = GenPinoutConfig.from_yaml(args.config)
    if args.log_level:
        config.log_level = args.log_level
    if getattr(args, "strict", False):
        config.strict_references = True
    if getattr(args, "overwrite", False):
        config.overwrite = True
    return config


def _script(args: argparse.Namespace) -> Path:
    """The script path, or exit with error."""
    script = Path(args.csv)
    if not script.exists():
        print(f"File not found: {script}", file=sys.stderr)
        sys.exit(1)
    return script


def cmd_render(args: argparse.Namespace, config: GenPinoutConfig) -> None:
    """Render a pinout script to SVG (and optionally PNG)."""
    script = _script(args)
    commands = parse_csv_file(script)

    renderer = PinoutRenderer(config, base_dir=script.parent)
    svg = renderer.render_svg(commands)

    out = Path(args.svg) if args.svg else default_output_path(script, config)
    save_svg(svg, out, overwrite=config.overwrite)
    print(f"SVG: {out}")

    if args.png:
        png_path = save_png(renderer.render_png(), out.with_suffix(".png"), overwrite=config.overwrite)
        print(f"PNG: {png_path}")

    width, height = renderer.document.resolution
    summary = renderer.metrics.summary()
    print(
        f"  {renderer.document.page} @ {renderer.document.dpi} DPI ({width}x{height} px), "
        f"{summary['total_commands']} commands, {summary['primitives']} primitives"
    )


def cmd_themes(args: argparse.Namespace, config: GenPinoutConfig) -> None:
    """Run the setup section of a script and print every resolved theme."""
    script = _script(args)
    commands = parse_csv_file(script)
    setup = itertools.takewhile(lambda cmd: not isinstance(cmd, BeginDraw), commands)

    renderer = PinoutRenderer(config, base_dir=script.parent)
    renderer.process(setup)

    themes = renderer.themes.dump()
    if renderer.themes.labels:
        print(f"Labels: {', '.join(renderer.themes.labels)}")
    print(f"Themes ({len(themes)}):")
    for name, attributes in themes.items():
        print(f"  {name}")
        for attribute, value in sorted(attributes.items()):
            print(f"    {attribute:<24} {value}")


def cmd_stats(args: argparse.Namespace, config: GenPinoutConfig) -> None:
    """Parse a script and report command counts by phase and kind."""
    script = _script(args)
    commands = parse_csv_file(script)

    metrics = RenderMetrics()
    for command in commands:
        metrics.record_command(command.kind, command.phase.value)
    summary = metrics.summary()

    print(f"{script}: {summary['total_commands']} commands")
    for phase, count in sorted(summary["phases"].items()):
        print(f"  {phase:<6} {count}")
    print()
    print(f"  {'Kind':<16} {'Count'}")
    print(f"  {'---':<16} {'---'}")
    for kind, count in sorted(summary["commands"].items()):
        print(f"  {kind:<16} {count}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genpinout",
        description="Render pinout diagrams from CSV scripts",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="genpinout.yaml", help="YAML config file")
    common.add_argument("--log-level", default=None, help="Override the configured log level")

    sub = parser.add_subparsers(dest="command")

    # render
    p_render = sub.add_parser("render", parents=[common], help="Render a script to SVG")
    p_render.add_argument("csv", help="Pinout script (CSV)")
    p_render.add_argument("svg", nargs="?", default=None, help="Output SVG path")
    p_render.add_argument("--overwrite", action="store_true", help="Replace existing output files")
    p_render.add_argument("--png", action="store_true", help="Also write a PNG next to the SVG")
    p_render.add_argument("--strict", action="store_true", help="Fail on undefined wire and box themes")

    # themes
    p_themes = sub.add_parser("themes", parents=[common], help="Dump the resolved themes of a script")
    p_themes.add_argument("csv", help="Pinout script (CSV)")

    # stats
    p_stats = sub.add_parser("stats", parents=[common], help="Command statistics of a script")
    p_stats.add_argument("csv", help="Pinout script (CSV)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the `genpinout` CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    commands = {
        "render": cmd_render,
        "themes": cmd_themes,
        "stats": cmd_stats,
    }

    config = _load_config(args)
    setup_logging(config.log_level)

    try:
        commands[args.command](args, config)
    except GenPinoutError as e:
        print(f"error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(1)
    except RuntimeError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
