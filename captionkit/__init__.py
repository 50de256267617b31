"""
CaptionKit - External captions for media players

Loads externally hosted WebVTT and SRT caption files, registers them as text
tracks on a player and keeps the active cues in sync with playback.

Features:
- Download caption files over HTTP (concurrently, all-or-nothing per batch)
- Convert SRT timing lines to the VTT timing syntax
- Parse cues with a push-style WebVTT parser
- Merge captions into the player's text tracks, one track per language
- Track active cues across forward playback and seeks
- Mirror captions onto platform native text tracks

Example usage:
    >>> import asyncio
    >>> from captionkit import ExternalCaptionsHandler, Player, PlayerConfig
    >>>
    >>> config = PlayerConfig.from_dict({
    ...     "sources": {"captions": {"tracks": [
    ...         {"url": "https://example.com/en.srt", "label": "English", "language": "en"},
    ...     ]}}
    ... })
    >>> player = Player(config)
    >>> handler = ExternalCaptionsHandler(player)
    >>> tracks = asyncio.run(handler.add_external_tracks())
    >>> handler.select_external_text_track(tracks[0])
    >>> player.time_update(12.5)
"""

import logging

__version__ = "0.1.0"
__author__ = "CaptionKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import timestamp_to_seconds, seconds_to_timestamp, get_file_type

# Conversion and parsing
from .converter import convert_srt_to_vtt
from .parser import WebVTTParser, parse_cues

# Main classes
from .loader import CaptionLoader, http_fetch
from .merger import merge_tracks
from .scheduler import CueScheduler
from .handler import ExternalCaptionsHandler

# Host and platform collaborators
from .player import (
    Event,
    EventEmitter,
    EventType,
    NativeTextTrack,
    NativeTextTrackList,
    Player,
    TrackList,
    TrackType,
)

# Errors
from .errors import CaptionError, CaptionFetchError, Severity, Category, Code

# Data models
from .models import (
    CaptionSource,
    Cue,
    CaptionTrack,
    TextTrack,
    SchedulerState,
    CaptionsConfig,
    PlayerConfig,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Utility functions
    "timestamp_to_seconds",
    "seconds_to_timestamp",
    "get_file_type",
    "convert_srt_to_vtt",
    "parse_cues",
    "merge_tracks",
    "http_fetch",

    # Main classes
    "WebVTTParser",
    "CaptionLoader",
    "CueScheduler",
    "ExternalCaptionsHandler",

    # Host and platform
    "Event",
    "EventEmitter",
    "EventType",
    "NativeTextTrack",
    "NativeTextTrackList",
    "Player",
    "TrackList",
    "TrackType",

    # Errors
    "CaptionError",
    "CaptionFetchError",
    "Severity",
    "Category",
    "Code",

    # Models
    "CaptionSource",
    "Cue",
    "CaptionTrack",
    "TextTrack",
    "SchedulerState",
    "CaptionsConfig",
    "PlayerConfig",
]
