"""
Active cue scheduling for CaptionKit.

Keeps the set of cues whose interval contains the playback position in step
with time updates. State is passed in and returned explicitly, so a tick and
a seek recovery can be exercised in isolation.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .models import Cue, SchedulerState

logger = logging.getLogger(__name__)


class CueScheduler:
    """
    Two-phase active cue scheduler.

    On every time update, active cues that no longer contain the current time
    are expired first, then every cue whose start has been passed is admitted.
    Admission is a loop because several cues can start within one tick after a
    large time delta.
    """

    @staticmethod
    def tick(
        state: SchedulerState,
        current_time: float,
        cues: Sequence[Cue],
    ) -> Tuple[SchedulerState, Optional[List[Cue]]]:
        """
        Advance the scheduler to ``current_time``.

        Args:
            state: Scheduler state of the selected track
            current_time: Playback position in seconds
            cues: The track's cues, ordered by non-decreasing start time

        Returns:
            Tuple of (new_state, changed_cues). ``changed_cues`` is the new
            active cue list when it changed, otherwise None.
        """
        active = state.active_cues

        # Playback moved back before the newest active cue: drop everything.
        # The pointer is left alone; seek recovery repositions it.
        if active and current_time < active[-1].start_time:
            logger.debug(f"Backward seek detected at {current_time:.3f}s, clearing active cues")
            return SchedulerState(cue_pointer=state.cue_pointer), []

        kept = [cue for cue in active if cue.contains(current_time)]
        changed = len(kept) != len(active)

        pointer = state.cue_pointer
        while pointer < len(cues) and current_time > cues[pointer].start_time:
            cue = cues[pointer]
            pointer += 1
            # Cues passed over entirely by a forward jump are not shown
            if cue.end_time < current_time:
                continue
            kept.append(cue)
            changed = True

        new_state = SchedulerState(cue_pointer=pointer, active_cues=tuple(kept))
        if changed:
            return new_state, kept
        return new_state, None

    @staticmethod
    def recover(cues: Sequence[Cue], current_time: float) -> int:
        """
        Recompute the cue pointer after an explicit seek.

        Returns:
            Index of the first cue starting after ``current_time``, or
            ``len(cues)`` when every cue has started.
        """
        for i, cue in enumerate(cues):
            if cue.start_time > current_time:
                return i
        return len(cues)

    @classmethod
    def seek(cls, state: SchedulerState, current_time: float, cues: Sequence[Cue]) -> SchedulerState:
        """Return ``state`` with the cue pointer recovered for ``current_time``."""
        return SchedulerState(
            cue_pointer=cls.recover(cues, current_time),
            active_cues=state.active_cues,
        )
