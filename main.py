"""CLI entry point for the pictograph animator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Pictograph animator: decode a sequence and export sampled prop poses.",
    )
    parser.add_argument(
        "sequence_file",
        help="Path to a pictograph PNG with an embedded sequence "
        "(or a JSON sequence array with --json).",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output JSON file path (default: <sequence_file stem>.frames.json)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Read a raw JSON sequence array instead of a PNG.",
    )
    parser.add_argument(
        "--strategy",
        default="circle",
        choices=["circle", "grid"],
        help="Position strategy (default: circle)",
    )
    parser.add_argument(
        "--beats-per-frame",
        type=float,
        default=None,
        help="Sampling resolution in beats (default: 0.25)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each sampled pose and enable debug logging",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from pictovis.config import EngineConfig
    from pictovis.constants import DEFAULT_BEATS_PER_FRAME
    from pictovis.engine import TimelineEngine
    from pictovis.export import frames_to_json, sample_frames
    from pictovis.types import PositionStrategy

    path = Path(args.sequence_file)
    if args.json:
        import json

        try:
            sequence = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            print(f"Could not read {path}: {e}", file=sys.stderr)
            return 1
    else:
        from pictovis.codec import read_sequence_file

        result = read_sequence_file(path)
        if not result.success:
            detail = f" ({result.detail})" if result.detail else ""
            print(f"Could not decode {path}: {result.error.value}{detail}", file=sys.stderr)
            return 1
        sequence = result.data

    engine = TimelineEngine(EngineConfig(position_strategy=PositionStrategy(args.strategy)))
    if not engine.load(sequence):
        print(f"Could not load a timeline from {path}", file=sys.stderr)
        return 1

    meta = engine.get_metadata()
    if args.verbose:
        print(f"Loaded '{meta.word or path.stem}' by {meta.author or 'unknown'}: "
              f"{engine.get_total_beats()} beats")

    frames = sample_frames(engine, args.beats_per_frame or DEFAULT_BEATS_PER_FRAME)

    if args.verbose:
        for pose in frames:
            b, r = pose.blue, pose.red
            print(f"  [{pose.beat:6.2f}] blue ({b.x:7.1f},{b.y:7.1f}) rot {b.staff_rotation_angle:5.2f}"
                  f" | red ({r.x:7.1f},{r.y:7.1f}) rot {r.staff_rotation_angle:5.2f}")

    output = Path(args.output) if args.output else path.with_suffix(".frames.json")
    output.write_text(frames_to_json(frames, meta))
    print(f"Wrote {output} ({len(frames)} frames)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
