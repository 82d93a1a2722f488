"""Timeline engine: resolves a fractional beat into a pose for both props.

The first step after the header is the start position and sits at beat 0;
step ``k`` plays over ``[k, k + 1)``, moving from its own location towards
the next step's. The final step plays over its own beat towards its
``end_loc``, so the timeline spans ``len(steps)`` beats. At the very end
the completed final step is held.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from .angles import lerp_angle, normalize_positive
from .config import EngineConfig
from .constants import MIN_SEQUENCE_STEPS
from .locations import lerp_coordinates, location_to_angle, location_to_coordinates
from .motions import staff_rotation_angle
from .types import (
    PositionStrategy,
    Pose,
    PropAttributes,
    PropColor,
    PropState,
    SequenceData,
    SequenceFormatError,
    SequenceMeta,
    SequenceStep,
)

logger = logging.getLogger(__name__)


class TimelineEngine:
    """Stateful interpolator for one animation session.

    Not safe for concurrent use; give each session its own engine.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._data: SequenceData | None = None
        self._steps: tuple[SequenceStep, ...] = ()
        self._total_beats = 0
        self._pose = Pose(beat=0.0, props={c: PropState() for c in PropColor})

    @property
    def is_loaded(self) -> bool:
        return self._data is not None and bool(self._steps)

    def load(self, data: SequenceData | list[Any]) -> bool:
        """Load a timeline, from a SequenceData or a raw ``[meta, *steps]`` array.

        Returns False (and leaves the engine unloaded) when the data is
        malformed or has no steps after the header.
        """
        if not isinstance(data, SequenceData):
            try:
                data = SequenceData.from_raw(data)
            except SequenceFormatError as e:
                logger.warning("Rejected sequence: %s", e)
                self._unload()
                return False

        if len(data.steps) < MIN_SEQUENCE_STEPS:
            logger.warning("Rejected sequence %r: no steps after header", data.meta.word)
            self._unload()
            return False

        self._data = data
        self._steps = data.steps
        self._total_beats = len(data.steps)
        self.reset()
        logger.debug(
            "Loaded sequence %r: %d steps, %d beats",
            data.meta.word, len(data.steps), self._total_beats,
        )
        return True

    def _unload(self) -> None:
        self._data = None
        self._steps = ()
        self._total_beats = 0
        self.reset()

    def reset(self) -> None:
        """Return both props to the zero pose, keeping the timeline."""
        self._pose.beat = 0.0
        for state in self._pose.props.values():
            state.center_path_angle = 0.0
            state.staff_rotation_angle = 0.0
            state.x = 0.0
            state.y = 0.0

    def clamp(self, beat: float) -> float:
        if math.isnan(beat):
            return 0.0
        return max(0.0, min(float(beat), float(self._total_beats)))

    def resolve(self, beat: float) -> tuple[SequenceStep, SequenceStep, float]:
        """Map a beat to (current step, next step, local t).

        The final step is its own next step; at the end of the timeline it
        resolves with ``t = 1``.

        Raises:
            LookupError: if no timeline is loaded.
        """
        if not self.is_loaded:
            raise LookupError("No sequence loaded")

        beat = self.clamp(beat)
        first, last = self._steps[0], self._steps[-1]
        if beat <= 0.0:
            return first, first, 0.0

        index = int(math.floor(beat))
        if index >= self._total_beats:
            return last, last, 1.0
        nxt = self._steps[min(index + 1, len(self._steps) - 1)]
        return self._steps[index], nxt, beat - index

    def query(self, beat: float) -> Pose:
        """Compute both props at ``beat`` and return a snapshot.

        On an unloaded engine this does nothing and returns the previous pose.
        """
        if not self.is_loaded:
            return self.get_prop_states()

        current, nxt, t = self.resolve(beat)
        self._pose.beat = self.clamp(beat)
        for color, state in self._pose.props.items():
            attrs = current.attributes_for(color)
            if nxt is current:
                target = attrs.end_loc or attrs.start_loc
            else:
                target = nxt.attributes_for(color).start_loc
            self._update_prop(state, attrs, target, t)
        return self.get_prop_states()

    def _update_prop(
        self,
        state: PropState,
        current: PropAttributes,
        target_loc: str | None,
        t: float,
    ) -> None:
        if self.config.position_strategy == PositionStrategy.GRID:
            gx, gy = lerp_coordinates(
                location_to_coordinates(current.start_loc),
                location_to_coordinates(target_loc),
                t,
            )
            state.x = gx * self.config.grid_scale
            state.y = gy * self.config.grid_scale
            # At the exact center the vector has no direction; atan2 gives 0.
            state.center_path_angle = normalize_positive(math.atan2(gy, gx))
        else:
            state.center_path_angle = lerp_angle(
                location_to_angle(current.start_loc),
                location_to_angle(target_loc),
                t,
            )
            state.x = math.cos(state.center_path_angle) * self.config.path_radius
            state.y = math.sin(state.center_path_angle) * self.config.path_radius

        state.staff_rotation_angle = staff_rotation_angle(
            current, state.center_path_angle, t,
        )

    @property
    def blue_state(self) -> PropState:
        return self._pose.blue.copy()

    @property
    def red_state(self) -> PropState:
        return self._pose.red.copy()

    def get_prop_states(self) -> Pose:
        return self._pose.copy()

    def get_total_beats(self) -> int:
        return self._total_beats

    def get_metadata(self) -> SequenceMeta:
        return self._data.meta if self._data is not None else SequenceMeta()

    def can_loop(self) -> bool:
        return self._total_beats > 0
