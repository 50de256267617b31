import asyncio

import pytest

from captionkit.errors import CaptionFetchError
from captionkit.handler import ExternalCaptionsHandler
from captionkit.loader import CaptionLoader
from captionkit.models import CaptionSource, CaptionsConfig, Cue, PlayerConfig, TextTrack
from captionkit.player import EventType, NativeTextTrackList, Player, TrackType

SOURCES = [
    CaptionSource(url="https://cdn.example.com/a.srt", label="English", language="en"),
    CaptionSource(url="https://cdn.example.com/b.vtt", label="French", language="fr"),
]


def _player(sources=SOURCES, tracks=None, native=False):
    config = PlayerConfig(captions=CaptionsConfig(tracks=list(sources), use_native_text_tracks=native))
    return Player(config, tracks=tracks)


def _record(player, event_type):
    events = []
    player.add_event_listener(event_type, events.append)
    return events


def test_add_external_tracks(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    tracks = asyncio.run(handler.add_external_tracks())

    assert [(t.index, t.language) for t in tracks] == [(0, "en"), (1, "fr")]
    assert player.get_tracks_by_type(TrackType.TEXT) == tracks
    assert [c.text for c in tracks[0].cues] == ["Hello", "World"]
    assert [c.text for c in tracks[1].cues] == ["Bonjour", "le monde"]
    assert all(t.external and not t.active and t.kind == "subtitles" for t in tracks)


def test_add_external_tracks_replaces_same_language(fake_fetch):
    embedded = TextTrack(index=0, language="en", label="Embedded")
    player = _player(tracks=[embedded])
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    tracks = asyncio.run(handler.add_external_tracks())

    assert [(t.index, t.language, t.label) for t in tracks] == [(0, "en", "English"), (1, "fr", "French")]
    assert tracks[0].external is True


def test_add_external_tracks_twice_keeps_one_track_per_language(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    asyncio.run(handler.add_external_tracks())
    tracks = asyncio.run(handler.add_external_tracks())

    assert [(t.index, t.language) for t in tracks] == [(0, "en"), (1, "fr")]


def test_fetch_failure_registers_nothing(fake_fetch):
    sources = [SOURCES[0], CaptionSource(url="https://cdn.example.com/missing.vtt", language="fr")]
    player = _player(sources=sources)
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    with pytest.raises(CaptionFetchError):
        asyncio.run(handler.add_external_tracks())
    assert player.get_tracks_by_type(TrackType.TEXT) == []


def test_no_captions_configured():
    player = Player(PlayerConfig())
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=lambda url: ""))
    assert asyncio.run(handler.add_external_tracks()) == []


def test_player_config_from_dict(fake_fetch):
    config = PlayerConfig.from_dict({
        "sources": {
            "captions": {
                "useNativeTextTrack": True,
                "tracks": [
                    {"url": "https://cdn.example.com/a.srt", "label": "English", "language": "en", "default": True},
                ],
            },
        },
    })
    assert config.captions.use_native_text_tracks is True
    assert config.captions.tracks[0].is_default is True

    handler = ExternalCaptionsHandler(Player(config), loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    assert tracks[0].is_default is True
    assert handler.native_tracks[0].language == "en"


def test_select_switches_active_track(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])

    changes = _record(player, EventType.TEXT_TRACK_CHANGED)
    handler.select_external_text_track(tracks[1])

    assert tracks[0].active is False
    assert tracks[1].active is True
    assert len(changes) == 1
    assert changes[0].payload["selectedTextTrack"] is tracks[1]


def test_reselecting_active_track_is_a_no_op(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])

    changes = _record(player, EventType.TEXT_TRACK_CHANGED)
    handler.select_external_text_track(tracks[0])

    assert changes == []
    assert player.listener_count(EventType.TIME_UPDATE) == 1


def test_select_unknown_track():
    handler = ExternalCaptionsHandler(_player())
    with pytest.raises(ValueError):
        handler.select_external_text_track(TextTrack(index=7, language="xx"))


def test_time_updates_drive_cue_changes(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    changes = _record(player, EventType.TEXT_CUE_CHANGED)

    player.time_update(0.5)
    assert changes == []

    player.time_update(1.5)
    assert [c.text for c in changes[-1].payload["cues"]] == ["Hello"]
    assert handler.active_cues == [Cue(start_time=1.0, end_time=2.0, text="Hello", id="1")]

    player.time_update(1.7)
    assert len(changes) == 1

    player.time_update(2.5)
    assert changes[-1].payload["cues"] == []

    player.time_update(3.5)
    assert [c.text for c in changes[-1].payload["cues"]] == ["World"]


def test_seek_back_recovers_cue_pointer(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    changes = _record(player, EventType.TEXT_CUE_CHANGED)

    player.time_update(3.5)
    assert handler.state.cue_pointer == 2

    player.seek(0.5)
    assert handler.state.cue_pointer == 0

    player.time_update(0.5)
    assert changes[-1].payload["cues"] == []

    player.time_update(1.5)
    assert [c.text for c in changes[-1].payload["cues"]] == ["Hello"]


def test_switching_tracks_resets_scheduler(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    player.time_update(3.5)

    handler.select_external_text_track(tracks[1])
    assert handler.state.cue_pointer == 0
    assert handler.active_cues == []

    changes = _record(player, EventType.TEXT_CUE_CHANGED)
    player.time_update(2.0)
    assert [c.text for c in changes[-1].payload["cues"]] == ["Bonjour"]
    assert player.listener_count(EventType.TIME_UPDATE) == 1


def test_native_text_tracks_are_mirrored(fake_fetch):
    native = NativeTextTrackList()
    stale = native.add_text_track("captions", "Old English", "en")
    stale.mode = "showing"
    stale.add_cue(Cue(start_time=0.0, end_time=1.0, text="stale"))

    player = _player(native=True)
    handler = ExternalCaptionsHandler(player, native_tracks=native, loader=CaptionLoader(fetch=fake_fetch))
    asyncio.run(handler.add_external_tracks())

    assert len(native) == 2
    assert native[0] is stale
    assert stale.mode == "hidden"
    assert [c.text for c in stale.cues] == ["Hello", "World"]
    assert native[1].kind == "captions"
    assert native[1].language == "fr"
    assert [c.text for c in native[1].cues] == ["Bonjour", "le monde"]


def test_native_tracks_untouched_when_not_requested(fake_fetch):
    native = NativeTextTrackList()
    handler = ExternalCaptionsHandler(_player(), native_tracks=native, loader=CaptionLoader(fetch=fake_fetch))
    asyncio.run(handler.add_external_tracks())
    assert len(native) == 0


def test_select_disables_native_tracks(fake_fetch):
    native = NativeTextTrackList()
    native.add_text_track("captions", "Embedded", "de").mode = "showing"
    player = _player()
    handler = ExternalCaptionsHandler(player, native_tracks=native, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())

    handler.select_external_text_track(tracks[0])
    assert native[0].mode == "disabled"


def test_reset_unsubscribes(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    player.time_update(1.5)

    handler.reset()
    changes = _record(player, EventType.TEXT_CUE_CHANGED)
    player.time_update(3.5)

    assert changes == []
    assert handler.active_cues == []
    assert player.listener_count(EventType.TIME_UPDATE) == 0
    assert player.listener_count(EventType.SEEKED) == 0


def test_appended_track_does_not_overwrite_gapped_indices(fake_fetch):
    existing = [TextTrack(index=1, language="es"), TextTrack(index=2, language="de")]
    player = _player(sources=[SOURCES[1]], tracks=existing)
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    tracks = asyncio.run(handler.add_external_tracks())

    assert [(t.index, t.language) for t in tracks] == [(1, "es"), (2, "de"), (3, "fr")]
    assert tracks[0] is existing[0]
    assert tracks[1] is existing[1]


def test_replacement_targets_the_same_language_slot(fake_fetch):
    existing = [TextTrack(index=4, language="de"), TextTrack(index=7, language="en", label="Embedded")]
    player = _player(tracks=existing)
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))

    tracks = asyncio.run(handler.add_external_tracks())

    assert [(t.index, t.language, t.external) for t in tracks] == [
        (4, "de", False), (7, "en", True), (2, "fr", True),
    ]


def test_switching_tracks_clears_host_cues(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    changes = _record(player, EventType.TEXT_CUE_CHANGED)

    player.time_update(3.5)
    assert [c.text for c in changes[-1].payload["cues"]] == ["World"]

    handler.select_external_text_track(tracks[1])
    assert changes[-1].payload["cues"] == []
    assert handler.active_cues == []

    player.time_update(3.6)
    player.time_update(3.9)
    assert changes[-1].payload["cues"] == []
    assert len(changes) == 2


def test_switching_tracks_without_active_cues_sends_no_cue_change(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    changes = _record(player, EventType.TEXT_CUE_CHANGED)

    handler.select_external_text_track(tracks[0])
    handler.select_external_text_track(tracks[1])
    assert changes == []


def test_reset_clears_host_cues(fake_fetch):
    player = _player()
    handler = ExternalCaptionsHandler(player, loader=CaptionLoader(fetch=fake_fetch))
    tracks = asyncio.run(handler.add_external_tracks())
    handler.select_external_text_track(tracks[0])
    changes = _record(player, EventType.TEXT_CUE_CHANGED)

    player.time_update(1.5)
    handler.reset()

    assert [[c.text for c in e.payload["cues"]] for e in changes] == [["Hello"], []]
