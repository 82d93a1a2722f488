"""Sample an engine into JSON keyframes for a renderer."""

from __future__ import annotations

import json

from .constants import DEFAULT_BEATS_PER_FRAME
from .engine import TimelineEngine
from .types import Pose, SequenceMeta


def sample_frames(
    engine: TimelineEngine,
    beats_per_frame: float = DEFAULT_BEATS_PER_FRAME,
) -> list[Pose]:
    """Query the engine at every multiple of beats_per_frame, both ends included.

    Returns an empty list for an unloaded engine.
    """
    if beats_per_frame <= 0:
        raise ValueError(f"beats_per_frame must be positive, got {beats_per_frame}")
    if not engine.is_loaded:
        return []

    total = engine.get_total_beats()
    n_frames = max(1, round(total / beats_per_frame)) if total > 0 else 0
    frames: list[Pose] = []
    for i in range(n_frames + 1):
        # Last frame lands exactly on total_beats even if the step doesn't divide it.
        beat = total if i == n_frames else i * beats_per_frame
        frames.append(engine.query(beat))
    return frames


def frames_to_json(frames: list[Pose], meta: SequenceMeta | None = None) -> str:
    out = []
    for pose in frames:
        props = {}
        for color, ps in pose.props.items():
            props[color.value] = {
                "x": round(ps.x, 4),
                "y": round(ps.y, 4),
                "center_path_angle": round(ps.center_path_angle, 6),
                "staff_rotation_angle": round(ps.staff_rotation_angle, 6),
            }
        out.append({"beat": round(pose.beat, 3), "props": props})

    return json.dumps({
        "meta": meta.model_dump(mode="json", exclude_none=True) if meta else {},
        "frames": out,
    })
