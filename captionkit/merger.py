"""
Track merging for CaptionKit.

Reconciles loaded caption tracks with the text tracks already registered on
the player so that at most one text track per language survives.
"""

import logging
from typing import List, Sequence

from .models import CaptionTrack, TextTrack

logger = logging.getLogger(__name__)


def _to_text_track(caption: CaptionTrack, index: int) -> TextTrack:
    return TextTrack(
        index=index,
        kind="subtitles",
        label=caption.label,
        language=caption.language,
        external=True,
        active=False,
        is_default=caption.is_default,
        cues=list(caption.cues),
    )


def merge_tracks(existing: Sequence[TextTrack], parsed: Sequence[CaptionTrack]) -> List[TextTrack]:
    """
    Merge loaded captions into the registered text tracks.

    A caption whose language matches a registered track replaces that track
    and takes over its index. Other captions are appended with the next
    unused index, counting up from the number of registered tracks and
    skipping indices already taken, in the order they appear in ``parsed``.
    Neither input is modified.

    Args:
        existing: Text tracks currently registered on the player
        parsed: Caption tracks produced by the loader

    Returns:
        The resulting text tracks: registered slots first, appended tracks after

    Example:
        >>> existing = [TextTrack(index=0, language="en")]
        >>> merged = merge_tracks(existing, [CaptionTrack(label="English", language="en")])
        >>> len(merged), merged[0].index, merged[0].external
        (1, 0, True)
    """
    merged = list(existing)
    slot_by_language = {}
    for slot, track in enumerate(merged):
        slot_by_language.setdefault(track.language, slot)
    used = {track.index for track in existing}
    next_index = len(existing)

    for caption in parsed:
        slot = slot_by_language.get(caption.language)
        if slot is not None:
            index = merged[slot].index
            logger.debug(f"Replacing text track {index} with external '{caption.language}' captions")
            merged[slot] = _to_text_track(caption, index)
        else:
            while next_index in used:
                next_index += 1
            logger.debug(f"Adding external '{caption.language}' captions as text track {next_index}")
            slot_by_language[caption.language] = len(merged)
            merged.append(_to_text_track(caption, next_index))
            used.add(next_index)
            next_index += 1

    return merged
