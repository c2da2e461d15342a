import sys
import argparse

try:
    from rich.console import Console
    from rich.table import Table
    from rich.panel import Panel
    from rich import box
except ImportError:
    print("Error: The 'rich' library is required for the CLI but not installed.", file=sys.stderr)
    print("Please install it with: pip install rawspec[cli]", file=sys.stderr)
    sys.exit(1)

import numpy as np

from rawspeclib import __version__
from rawspeclib.audio import LoadError, load_samples
from rawspeclib.config import (
    ConfigError, default_config, load_preset, merge_configs, param_spec,
    validate_config,
)
from rawspeclib.events import EventBus, VIEWPORT_CHANGED
from rawspeclib.models import PointerEvent, PointerKind
from rawspeclib.reports import build_summary, save_json
from rawspeclib.selection import SelectionController
from rawspeclib.spectrogram import build_spectrogram, column_count, sample_range
from rawspeclib.window import window_coefficients

console = Console()


def positive_int(value):
    ivalue = int(value)
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return ivalue


def param_help(key):
    spec = param_spec(key)
    return f"{spec.description} (default: {spec.default:g})"


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="rawspec: spectrogram of a raw uint16 recording",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--version", action="version",
                        version=f"rawspec {__version__}")

    parser.add_argument("file", type=str,
                        help="Raw recording (little-endian unsigned 16-bit samples)")

    # Analysis
    parser.add_argument("--preset", type=str, default=None,
                        help="JSON preset with analysis settings (CLI flags override it)")
    # Unset analysis flags stay absent so preset values survive.
    parser.add_argument("--center", type=float, default=argparse.SUPPRESS,
                        help=param_help("center"))
    parser.add_argument("--decimation", type=positive_int, default=argparse.SUPPRESS,
                        help=param_help("decimation"))
    parser.add_argument("--z-low", dest="z_low", type=float, default=argparse.SUPPRESS,
                        help=param_help("z_low"))
    parser.add_argument("--z-high", dest="z_high", type=float, default=argparse.SUPPRESS,
                        help=param_help("z_high"))
    parser.add_argument("--workers", type=positive_int, default=argparse.SUPPRESS,
                        help=param_help("workers"))

    # Zoom
    parser.add_argument("--select", nargs=4, type=int, action="append", default=[],
                        metavar=("X0", "Y0", "X1", "Y1"),
                        help="Replay a rubber-band selection (press at X0,Y0, release "
                             "at X1,Y1). Repeat to zoom further.")
    parser.add_argument("--bounds", nargs=2, type=positive_int, default=[800, 256],
                        metavar=("W", "H"),
                        help="Size of the area the --select coordinates refer to")

    # Output
    parser.add_argument("--save-grid", dest="save_grid", type=str, default=None,
                        help="Write the RGBA grid as a .npy file")
    parser.add_argument("--json", type=str, default=None,
                        help="Write a JSON summary")

    return parser.parse_args(argv)


def build_config(args) -> dict:
    config = default_config()
    if args.preset:
        config = merge_configs(config, load_preset(args.preset))
    overrides = {
        k: getattr(args, k)
        for k in ("center", "decimation", "z_low", "z_high", "workers")
        if hasattr(args, k)
    }
    config = merge_configs(config, overrides, {"_source_file": args.file})
    validate_config({k: v for k, v in config.items() if not k.startswith("_")})
    return config


def replay_selections(selections, bounds, event_bus: EventBus | None = None) -> SelectionController:
    """Feed --select rectangles through a SelectionController."""
    controller = SelectionController(event_bus)
    width, height = bounds
    for x0, y0, x1, y1 in selections:
        controller.handle(PointerEvent(PointerKind.PRESS, x0, y0))
        controller.handle(PointerEvent(PointerKind.DRAG, x1, y1))
        controller.handle(PointerEvent(PointerKind.RELEASE, x1, y1, width, height))
    return controller


def print_summary(summary: dict) -> None:
    table = Table(box=box.ROUNDED, title="Spectrogram", title_justify="left")
    table.add_column("Property", style="bold cyan")
    table.add_column("Value", justify="right")

    grid = summary["grid"]
    start, stop = summary["sample_range"]
    vp = summary["viewport"]
    table.add_row("Samples", f"{summary['samples']:,}")
    table.add_row("Center", f"{summary['center']:g}")
    table.add_row("Frame size", str(summary["frame_size"]))
    table.add_row("Grid", f"{grid['width']} x {grid['height']}")
    table.add_row("Sample range", f"{start:,} .. {stop:,}")
    if vp is None:
        table.add_row("Viewport", "[dim]full[/]")
    else:
        table.add_row("Viewport",
                      f"offset ({vp['offset'][0]:.4f}, {vp['offset'][1]:.4f}) "
                      f"size ({vp['size'][0]:.4f}, {vp['size'][1]:.4f})")
    table.add_row("log10 |X| range",
                  f"[green]{summary['z_min']:g}[/] .. [green]{summary['z_max']:g}[/]")
    console.print(table)


def main(argv=None) -> int:
    args = parse_arguments(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    try:
        buffer = load_samples(args.file, center=config["center"])
    except LoadError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    console.print(Panel.fit(
        f"[bold]rawspec[/]\n"
        f"File: [cyan]{args.file}[/]\n"
        f"Intensity: [cyan]{config['z_low']:g} .. {config['z_high']:g}[/] (log10) | "
        f"Decimation: [cyan]{config['decimation']}[/]",
        title="Configuration"
    ))

    event_bus = EventBus()

    def on_viewport_changed(viewport):
        console.print(f"  [dim]* zoom -> offset ({viewport.offset.x:.4f}, "
                      f"{viewport.offset.y:.4f}) size ({viewport.size.x:.4f}, "
                      f"{viewport.size.y:.4f})[/]")
    event_bus.subscribe(VIEWPORT_CHANGED, on_viewport_changed)

    controller = replay_selections(args.select, args.bounds, event_bus)
    viewport = controller.viewport
    if viewport is not None and viewport.is_degenerate:
        console.print("  [yellow]⚠ selection has zero or negative extent[/]")

    start, stop = sample_range(viewport, len(buffer))
    width = column_count(len(buffer), config["decimation"])
    window = window_coefficients()

    try:
        with console.status("[cyan]Computing spectrogram..."):
            result = build_spectrogram(
                buffer, window, width, start=start, stop=stop,
                z_low=config["z_low"], z_high=config["z_high"],
                workers=config["workers"],
            )
    except ValueError as e:
        console.print(f"[bold red]Error:[/] {e}")
        return 1

    summary = build_summary(buffer, result, viewport)
    print_summary(summary)

    if args.save_grid:
        np.save(args.save_grid, result.pixels)
        console.print(f"\n[dim]Grid saved to: {args.save_grid}[/]")
    if args.json:
        save_json(buffer, result, viewport, config, args.json)
        console.print(f"[dim]Summary saved to: {args.json}[/]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
