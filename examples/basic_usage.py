"""
Basic CaptionKit usage example.

Demonstrates loading external captions onto a player, selecting one and
following the active cues as playback advances and seeks.
"""

import asyncio
import logging

from captionkit import CaptionFetchError, EventType, ExternalCaptionsHandler, Player, PlayerConfig

def main():
    logging.basicConfig(level=logging.INFO)

    config = PlayerConfig.from_dict({
        "sources": {
            "captions": {
                "tracks": [
                    {"url": "https://example.com/subtitles/en.srt", "label": "English", "language": "en"},
                    {"url": "https://example.com/subtitles/fr.vtt", "label": "Français", "language": "fr"},
                ],
            },
        },
    })
    player = Player(config)
    handler = ExternalCaptionsHandler(player)

    player.add_event_listener(
        EventType.TEXT_CUE_CHANGED,
        lambda event: print(f"[{player.current_time:6.2f}s] {[cue.text for cue in event.payload['cues']]}"),
    )

    # Load and register caption tracks
    print("Loading captions...")
    try:
        tracks = asyncio.run(handler.add_external_tracks())
    except CaptionFetchError as e:
        print(f"Continuing without captions: {e} ({e.payload})")
        return

    for track in tracks:
        print(f"Track {track.index}: {track.label} ({track.language}), {len(track.cues)} cues")

    handler.select_external_text_track(tracks[0])

    # Simulate playback
    for step in range(0, 100):
        player.time_update(step * 0.25)

    # Simulate a seek back to the start
    player.seek(0.0)
    player.time_update(0.0)

if __name__ == "__main__":
    main()
