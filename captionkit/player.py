"""
Host player and platform collaborators for CaptionKit.

Minimal in-memory implementations of what the captions handler needs from a
media player: a track list, event dispatch, a playback clock and the
platform's native text tracks.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .models import Cue, PlayerConfig, TextTrack

logger = logging.getLogger(__name__)


class EventType:
    TIME_UPDATE = "timeupdate"
    SEEKED = "seeked"
    TEXT_TRACK_CHANGED = "texttrackchanged"
    TEXT_CUE_CHANGED = "cuechange"


class TrackType:
    TEXT = "text"
    AUDIO = "audio"
    VIDEO = "video"


@dataclass
class Event:
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[Event], None]


class EventEmitter:
    """Synchronous event dispatch keyed by event type."""

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        if listener in self._listeners[event_type]:
            self._listeners[event_type].remove(listener)

    def dispatch_event(self, event: Event) -> None:
        for listener in list(self._listeners[event.type]):
            listener(event)

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners[event_type])


class TrackList:
    """The player's tracks. Text tracks are addressed by their index."""

    def __init__(self, tracks: Optional[List[Any]] = None):
        self._tracks: Dict[str, List[Any]] = defaultdict(list)
        for track in tracks or []:
            self.append_track(track)

    @staticmethod
    def _type_of(track: Any) -> str:
        if isinstance(track, TextTrack):
            return TrackType.TEXT
        return getattr(track, "type", TrackType.VIDEO)

    def get_tracks_by_type(self, track_type: str) -> List[Any]:
        return list(self._tracks[track_type])

    def append_track(self, track: Any) -> None:
        self._tracks[self._type_of(track)].append(track)

    def replace_track_at(self, index: int, track: Any) -> None:
        """
        Replace the track of the same type registered under ``index``.

        Raises:
            IndexError: If no such track is registered
        """
        tracks = self._tracks[self._type_of(track)]
        for slot, current in enumerate(tracks):
            if current.index == index:
                tracks[slot] = track
                return
        raise IndexError(f"No {self._type_of(track)} track with index {index}")


class Player(EventEmitter):
    """Host player: configuration, tracks, clock and events."""

    def __init__(self, config: Optional[PlayerConfig] = None, tracks: Optional[List[Any]] = None):
        super().__init__()
        self.config = config or PlayerConfig()
        self.tracks = TrackList(tracks)
        self.current_time = 0.0

    def get_tracks_by_type(self, track_type: str) -> List[Any]:
        return self.tracks.get_tracks_by_type(track_type)

    def time_update(self, current_time: float) -> None:
        """Advance the playback clock and signal a time update."""
        self.current_time = current_time
        self.dispatch_event(Event(EventType.TIME_UPDATE, {"currentTime": current_time}))

    def seek(self, current_time: float) -> None:
        """Jump the playback clock and signal a completed seek."""
        self.current_time = current_time
        self.dispatch_event(Event(EventType.SEEKED, {"currentTime": current_time}))


class NativeTextTrack:
    """A platform text track. The platform schedules its own cues."""

    def __init__(self, kind: str, label: str, language: str):
        self.kind = kind
        self.label = label
        self.language = language
        self.mode = "disabled"
        self.cues: List[Cue] = []

    def add_cue(self, cue: Cue) -> None:
        self.cues.append(cue)

    def remove_cue(self, cue: Cue) -> None:
        self.cues.remove(cue)


class NativeTextTrackList:
    """The platform's text track list (the video element's textTracks)."""

    def __init__(self):
        self.tracks: List[NativeTextTrack] = []

    def __len__(self) -> int:
        return len(self.tracks)

    def __getitem__(self, i: int) -> NativeTextTrack:
        return self.tracks[i]

    def add_text_track(self, kind: str, label: str = "", language: str = "") -> NativeTextTrack:
        track = NativeTextTrack(kind, label, language)
        self.tracks.append(track)
        return track

    def index_of_language(self, language: str) -> int:
        for i, track in enumerate(self.tracks):
            if track.language == language:
                return i
        return -1

    def disable_all(self) -> None:
        for track in self.tracks:
            track.mode = "disabled"
