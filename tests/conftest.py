import pytest
import requests

SRT_CONTENT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "Hello\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:04,000\n"
    "World\n"
)

VTT_CONTENT = (
    "WEBVTT\n"
    "\n"
    "00:00:01.500 --> 00:00:03.000\n"
    "Bonjour\n"
    "\n"
    "00:00:05.000 --> 00:00:06.000\n"
    "le monde\n"
)


class FakeFetch:
    """Serves caption files from memory; unknown URLs fail like a dead host."""

    def __init__(self, files):
        self.files = files
        self.requested = []

    def __call__(self, url):
        self.requested.append(url)
        if url not in self.files:
            raise requests.ConnectionError(f"Connection refused: {url}")
        return self.files[url]


@pytest.fixture
def fake_fetch():
    return FakeFetch({
        "https://cdn.example.com/a.srt": SRT_CONTENT,
        "https://cdn.example.com/b.vtt": VTT_CONTENT,
    })
