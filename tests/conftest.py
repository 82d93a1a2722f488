"""Shared pytest fixtures for pictovis tests."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from pictovis.codec import embed_sequence
from pictovis.engine import TimelineEngine

# ============================================================================
# Builders
# ============================================================================


def make_attrs(
    motion_type: str = "static",
    start_loc: str | None = "s",
    end_loc: str | None = None,
    start_ori: str | None = "in",
    end_ori: str | None = None,
    prop_rot_dir: str | None = "no_rot",
    turns: float | None = 0,
) -> dict[str, Any]:
    return {
        "motion_type": motion_type,
        "start_loc": start_loc,
        "end_loc": end_loc if end_loc is not None else start_loc,
        "start_ori": start_ori,
        "end_ori": end_ori if end_ori is not None else start_ori,
        "prop_rot_dir": prop_rot_dir,
        "turns": turns,
    }


def make_step(beat: int, blue: dict[str, Any], red: dict[str, Any], **extra: Any) -> dict[str, Any]:
    return {"beat": beat, "blue_attributes": blue, "red_attributes": red, **extra}


def make_meta(word: str = "TEST", **extra: Any) -> dict[str, Any]:
    meta = {
        "word": word,
        "author": "tester",
        "level": 1,
        "prop_type": "staff",
        "grid_mode": "diamond",
    }
    meta.update(extra)
    return meta


def blank_png(size: tuple[int, int] = (4, 4)) -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, (255, 255, 255)).save(out, format="PNG")
    return out.getvalue()


def write_sequence_png(path: Path, raw_sequence: list[dict[str, Any]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(embed_sequence(blank_png(), raw_sequence))
    return path


# ============================================================================
# Sequence Fixtures
# ============================================================================


@pytest.fixture
def scenario_raw() -> list[dict[str, Any]]:
    """Start position followed by one pro float.

    Blue: static at s/in, then pro s->w (cw, 0 turns).
    Red:  static at n/in, then pro n->e (cw, 0 turns).
    """
    return [
        make_meta("SCENARIO"),
        make_step(
            0,
            make_attrs("static", "s"),
            make_attrs("static", "n"),
            sequence_start_position="alpha",
        ),
        make_step(
            1,
            make_attrs("pro", "s", "w", prop_rot_dir="cw"),
            make_attrs("pro", "n", "e", prop_rot_dir="cw"),
            letter="A",
        ),
    ]


@pytest.fixture
def single_step_raw() -> list[dict[str, Any]]:
    return [
        make_meta("ONE"),
        make_step(0, make_attrs("static", "e", start_ori="out"), make_attrs("static", "w")),
    ]


@pytest.fixture
def engine(scenario_raw) -> TimelineEngine:
    eng = TimelineEngine()
    assert eng.load(scenario_raw)
    return eng
