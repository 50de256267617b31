"""
Data models for CaptionKit.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple


@dataclass(frozen=True)
class CaptionSource:
    """A caption file configured on the player, identified by URL."""
    url: str
    label: str = ""
    language: str = ""
    is_default: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CaptionSource":
        """
        Build a source from player configuration.

        The player config uses ``default`` for the default flag; ``is_default``
        is accepted as well.
        """
        return cls(
            url=data["url"],
            label=data.get("label", ""),
            language=data.get("language", ""),
            is_default=bool(data.get("default", data.get("is_default", False))),
        )


@dataclass(frozen=True)
class Cue:
    """A timed caption unit. Times are in seconds."""
    start_time: float
    end_time: float
    text: str = ""
    id: str = ""

    def contains(self, current_time: float) -> bool:
        return self.start_time <= current_time <= self.end_time


@dataclass
class CaptionTrack:
    """A loaded caption file with its parsed cues, before registration."""
    label: str
    language: str
    is_default: bool = False
    cues: List[Cue] = field(default_factory=list)


@dataclass
class TextTrack:
    """A text track registered on the player's track list."""
    index: int
    language: str
    label: str = ""
    kind: str = "subtitles"
    external: bool = False
    active: bool = False
    is_default: bool = False
    cues: List[Cue] = field(default_factory=list)


@dataclass(frozen=True)
class SchedulerState:
    """Cue pointer and active cues of the selected external track."""
    cue_pointer: int = 0
    active_cues: Tuple[Cue, ...] = ()


@dataclass
class CaptionsConfig:
    """Configuration for external captions."""
    tracks: List[CaptionSource] = field(default_factory=list)
    use_native_text_tracks: bool = False
    timeout: int = 30
    verify_ssl: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CaptionsConfig":
        return cls(
            tracks=[CaptionSource.from_dict(t) for t in data.get("tracks", [])],
            use_native_text_tracks=bool(data.get("useNativeTextTrack", data.get("use_native_text_tracks", False))),
            timeout=data.get("timeout", 30),
            verify_ssl=data.get("verify_ssl", True),
        )


@dataclass
class PlayerConfig:
    """The subset of player configuration read by the captions handler."""
    captions: Optional[CaptionsConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerConfig":
        captions = data.get("sources", {}).get("captions")
        return cls(captions=CaptionsConfig.from_dict(captions) if captions else None)
