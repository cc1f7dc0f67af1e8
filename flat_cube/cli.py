"""CLI entrypoint for the flat cube."""

from __future__ import annotations

import argparse

from .actions import DEFAULT_HEIGHT, DEFAULT_PALETTE, DEFAULT_WIDTH
from .config import load_config
from .engine import FlatCubeEngine
from .server import FlatCubeHTTPServer
from .state_codec import CubeValidationError
from .types import ChangeEvent


def _parse_colors(text: str) -> list[str]:
    return [c.strip() for c in text.split(",") if c.strip()]


def _colors_default(value) -> list:
    if isinstance(value, str):
        return _parse_colors(value)
    return list(value)


def build_parser(defaults: dict | None = None) -> argparse.ArgumentParser:
    d = defaults or {}
    cube = d.get("cube") or {}
    srv = d.get("server") or {}
    gui_cfg = d.get("gui") or {}

    parser = argparse.ArgumentParser(description="Flat cube: twist rows and columns of one face at a time")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="Path to YAML config (cube, server, gui)")
    common.add_argument("--host", default=srv.get("host", "127.0.0.1"))
    common.add_argument("--port", type=int, default=srv.get("port", 8000))
    common.add_argument("--width", type=int, default=cube.get("width", DEFAULT_WIDTH))
    common.add_argument("--height", type=int, default=cube.get("height", DEFAULT_HEIGHT))
    common.add_argument(
        "--colors",
        type=_parse_colors,
        default=_colors_default(cube.get("colors", DEFAULT_PALETTE)),
        help="Comma-separated palette for top,front,right,back,left,bottom",
    )
    common.add_argument("--scramble-steps", type=int, default=gui_cfg.get("scramble_steps", 0))
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--verbose", action="store_true", help="Print one line per model change")

    sub.add_parser("headless", parents=[common], help="Run headless HTTP API")

    gui = sub.add_parser("gui", parents=[common], help="Run pygame flat view with HTTP API")
    gui.add_argument("--cell-size", type=int, default=gui_cfg.get("cell_size", 72))

    return parser


def _print_change(event: ChangeEvent) -> None:
    if event.index is None:
        print(f"model_changed kind={event.kind} orientation={event.orientation}", flush=True)
    else:
        print(
            f"model_changed kind={event.kind} orientation={event.orientation} "
            f"index={event.index} direction={event.direction}",
            flush=True,
        )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    # Pre-parse to get --config
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=str, default=None)
    pre_args, _ = pre.parse_known_args(argv)

    defaults = {}
    if pre_args.config:
        try:
            defaults = load_config(pre_args.config)
        except (OSError, CubeValidationError) as exc:
            build_parser().error(f"cannot load config: {exc}")

    return build_parser(defaults).parse_args(argv)


def main(argv: list[str] | None = None):
    args = parse_args(argv)

    try:
        engine = FlatCubeEngine(width=args.width, height=args.height, palette=args.colors)
    except CubeValidationError as exc:
        raise SystemExit(f"error: {exc}") from exc

    if args.verbose:
        engine.add_listener(_print_change)
    if args.scramble_steps > 0:
        engine.scramble(args.scramble_steps, seed=args.seed)

    if args.mode == "headless":
        server = FlatCubeHTTPServer(engine=engine, host=args.host, port=args.port, mode="headless")
        print(f"Flat cube headless server listening on http://{server.host}:{server.port}", flush=True)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            server.shutdown()
        return

    if args.mode == "gui":
        from .gui import FlatCubeGUI

        try:
            app = FlatCubeGUI(
                engine=engine,
                host=args.host,
                port=args.port,
                cell_size=args.cell_size,
                scramble_steps=args.scramble_steps or 20,
            )
        except CubeValidationError as exc:
            raise SystemExit(f"error: {exc}") from exc
        app.run()
        return

    raise SystemExit(f"Unsupported mode: {args.mode}")


if __name__ == "__main__":
    main()
