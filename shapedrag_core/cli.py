"""Command line interface for shapedrag."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

from .config import EngineConfig, load_config
from .controller import DragController, render_frame
from .events import pointer_event
from .scene import default_scene
from .shapes import Shape, create_shape


def _parse_points(text: str) -> List[Tuple[float, float]]:
    pts: List[Tuple[float, float]] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) != 2:
            raise ValueError(f"Point '{token}' must be written as x,y")
        pts.append((float(parts[0]), float(parts[1])))
    return pts


def _read_json(path: Path):
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _shape_from_payload(payload: dict) -> Shape:
    if not isinstance(payload, dict):
        raise ValueError("Shape must be a JSON object with 'kind' and 'points'.")
    if "kind" not in payload or "points" not in payload:
        raise ValueError("Shape JSON requires 'kind' and 'points'.")
    return create_shape(payload["kind"], payload["points"], shape_id=payload.get("id"))


def _dump(data) -> None:
    print(json.dumps(data, indent=2))


def _config_from_args(args: argparse.Namespace) -> EngineConfig:
    config = load_config(args.config) if args.config else EngineConfig()
    if getattr(args, "clamp", False):
        config = config.model_copy(update={"clamp_to_canvas_bounds": True})
    return config


def _cmd_derive(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    if args.shape:
        shape = _shape_from_payload(_read_json(Path(args.shape)))
    else:
        if not args.kind or not args.points:
            raise ValueError("Either --shape or both --kind and --points are required.")
        shape = create_shape(args.kind, _parse_points(args.points))
    frame = render_frame(shape, config)
    _dump(frame.asdict())


def _cmd_replay(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    data = _read_json(Path(args.script))
    if not isinstance(data, dict) or "shape" not in data:
        raise ValueError("Replay file must contain a 'shape' object and an 'events' list.")
    events = data.get("events", [])
    if not isinstance(events, list):
        raise ValueError("'events' must be a list.")
    controller = DragController(_shape_from_payload(data["shape"]), config)
    for item in events:
        event = pointer_event(
            item["phase"],
            item["position"],
            target_index=item.get("target_index"),
            pointer_type=item.get("pointer_type", "mouse"),
        )
        controller.handle(event)
    _dump(controller.frame().asdict())


def _cmd_demo(args: argparse.Namespace) -> None:
    scene = default_scene(_config_from_args(args))
    _dump({sid: frame.asdict() for sid, frame in scene.frames().items()})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shapedrag",
        description="Derive shape geometry and replay pointer interactions",
    )
    parser.add_argument("--config", help="Path to an engine config JSON file")
    parser.add_argument("--clamp", action="store_true", help="Clamp dragged points to the canvas")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    derive = sub.add_parser("derive", help="Print derived geometry for a shape")
    derive.add_argument("--kind", choices=["circle", "arc", "ellipse", "curve", "line"], help="Shape kind")
    derive.add_argument("--points", help='Defining points, e.g. "50,50 100,100 100,0"')
    derive.add_argument("--shape", help="Path to a JSON file with 'kind' and 'points'")
    derive.set_defaults(func=_cmd_derive)

    replay = sub.add_parser("replay", help="Replay pointer events against a shape")
    replay.add_argument("script", help="JSON file with 'shape' and 'events'")
    replay.set_defaults(func=_cmd_replay)

    demo = sub.add_parser("demo", help="Print the demo scene")
    demo.set_defaults(func=_cmd_demo)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
    try:
        args.func(args)
    except (ValueError, KeyError, OSError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
