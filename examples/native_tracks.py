"""
Native text tracks example.

Demonstrates mirroring external captions onto platform text tracks instead of
scheduling cues on the player.
"""

import asyncio

from captionkit import ExternalCaptionsHandler, NativeTextTrackList, Player, PlayerConfig

def main():
    config = PlayerConfig.from_dict({
        "sources": {
            "captions": {
                "useNativeTextTrack": True,
                "tracks": [
                    {"url": "https://example.com/subtitles/en.vtt", "label": "English", "language": "en"},
                ],
            },
        },
    })
    native_tracks = NativeTextTrackList()
    handler = ExternalCaptionsHandler(Player(config), native_tracks=native_tracks)

    asyncio.run(handler.add_external_tracks())

    for track in native_tracks:
        print(f"{track.kind}: {track.label} ({track.language}) mode={track.mode}, {len(track.cues)} cues")

if __name__ == "__main__":
    main()
