"""
External captions handler for CaptionKit.

Loads the captions configured on the player, registers them as text tracks
and, for the selected external track, keeps the player's active cues in sync
with playback. When native text tracks are requested the captions are
mirrored onto the platform instead, which then schedules cues itself.
"""

import logging
from typing import List, Optional, Sequence

from .loader import CaptionLoader
from .merger import merge_tracks
from .models import CaptionTrack, Cue, SchedulerState, TextTrack
from .player import Event, EventType, NativeTextTrackList, Player, TrackType
from .scheduler import CueScheduler

logger = logging.getLogger(__name__)


class ExternalCaptionsHandler:
    """
    Manages external caption tracks on a player.

    Args:
        player: Host player providing config, tracks, clock and events
        native_tracks: Platform text tracks, used when the captions config
            sets ``use_native_text_tracks``
        loader: Caption loader (default: HTTP loader built from the config)
    """

    def __init__(
        self,
        player: Player,
        native_tracks: Optional[NativeTextTrackList] = None,
        loader: Optional[CaptionLoader] = None,
    ):
        self.player = player
        self.native_tracks = native_tracks if native_tracks is not None else NativeTextTrackList()
        self.loader = loader
        self.scheduler = CueScheduler()
        self.state = SchedulerState()
        self.active_cues: List[Cue] = []
        self._selected: Optional[TextTrack] = None
        self._subscribed = False

    @property
    def use_native_text_tracks(self) -> bool:
        captions = self.player.config.captions
        return bool(captions and captions.use_native_text_tracks)

    def _get_loader(self) -> CaptionLoader:
        if self.loader is None:
            captions = self.player.config.captions
            self.loader = CaptionLoader(timeout=captions.timeout, verify_ssl=captions.verify_ssl)
        return self.loader

    async def add_external_tracks(self) -> List[TextTrack]:
        """
        Load the configured captions and register them on the player.

        Only one call should be in flight at a time.

        Returns:
            The player's text tracks after the merge

        Raises:
            CaptionFetchError: If any caption fails to download; nothing is
                registered in that case
        """
        captions = self.player.config.captions
        if not captions or not captions.tracks:
            return self.player.get_tracks_by_type(TrackType.TEXT)

        parsed = await self._get_loader().load(captions.tracks)
        existing = self.player.get_tracks_by_type(TrackType.TEXT)
        merged = merge_tracks(existing, parsed)
        # Slots below len(existing) are the registered tracks, in order
        for slot, track in enumerate(merged):
            if slot >= len(existing):
                self.player.tracks.append_track(track)
            elif track is not existing[slot]:
                self.player.tracks.replace_track_at(existing[slot].index, track)
        logger.info(f"Registered {len(parsed)} external caption tracks")

        if self.use_native_text_tracks:
            self._create_native_text_tracks(parsed)

        return self.player.get_tracks_by_type(TrackType.TEXT)

    def _create_native_text_tracks(self, captions: Sequence[CaptionTrack]) -> None:
        for caption in captions:
            index = self.native_tracks.index_of_language(caption.language)
            if index > -1:
                track = self.native_tracks[index]
                track.mode = "hidden"
                for cue in list(track.cues):
                    track.remove_cue(cue)
            else:
                track = self.native_tracks.add_text_track("captions", caption.label, caption.language)
            for cue in caption.cues:
                track.add_cue(cue)
            logger.debug(f"Mirrored {len(caption.cues)} '{caption.language}' cues to native text track")

    def select_external_text_track(self, text_track: TextTrack) -> None:
        """
        Make ``text_track`` the active text track and start tracking its cues.

        Every other text track is deactivated. Selecting the already active
        track does nothing.

        Raises:
            ValueError: If no text track with that index is registered
        """
        track = None
        for candidate in self.player.get_tracks_by_type(TrackType.TEXT):
            if candidate.index == text_track.index:
                track = candidate
            else:
                candidate.active = False
        if track is None:
            raise ValueError(f"No text track with index {text_track.index}")
        if track.active:
            return

        self.native_tracks.disable_all()
        logger.debug(f"External text track changed: {track.index} ({track.language})")
        track.active = True
        self.player.dispatch_event(Event(EventType.TEXT_TRACK_CHANGED, {"selectedTextTrack": track}))

        self._selected = track
        self._clear_active_cues()
        if not self._subscribed:
            self.player.add_event_listener(EventType.TIME_UPDATE, self._on_time_update)
            self.player.add_event_listener(EventType.SEEKED, self._on_seeked)
            self._subscribed = True

    def _on_time_update(self, event: Event) -> None:
        self.handle_time_update()

    def _on_seeked(self, event: Event) -> None:
        self.handle_seek()

    def handle_time_update(self) -> None:
        """Run one scheduler tick for the selected track at the player's current time."""
        if self._selected is None:
            return
        self.state, changed = self.scheduler.tick(self.state, self.player.current_time, self._selected.cues)
        if changed is not None:
            self.active_cues = changed
            self.player.dispatch_event(Event(EventType.TEXT_CUE_CHANGED, {"cues": list(changed)}))

    def handle_seek(self) -> None:
        """Reposition the cue pointer after the player seeked."""
        if self._selected is None or not self._selected.external:
            return
        self.state = self.scheduler.seek(self.state, self.player.current_time, self._selected.cues)
        logger.debug(f"Cue pointer set to {self.state.cue_pointer} after seek to {self.player.current_time:.3f}s")

    def reset(self) -> None:
        """Stop tracking cues and forget the selected track."""
        if self._subscribed:
            self.player.remove_event_listener(EventType.TIME_UPDATE, self._on_time_update)
            self.player.remove_event_listener(EventType.SEEKED, self._on_seeked)
            self._subscribed = False
        self._selected = None
        self._clear_active_cues()

    destroy = reset

    def _clear_active_cues(self) -> None:
        self.state = SchedulerState()
        if self.active_cues:
            self.active_cues = []
            self.player.dispatch_event(Event(EventType.TEXT_CUE_CHANGED, {"cues": []}))
