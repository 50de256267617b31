"""
Cue parsing for CaptionKit.

Provides a push-style WebVTT cue parser and the adapter that drives it:
text is fed to the parser, a flush is requested, and cues emitted through the
``oncue`` callback are collected in emission order until ``onflush`` fires.
"""

import logging
import re
from typing import Callable, List, Optional

from .models import Cue
from .utils import timestamp_to_seconds

logger = logging.getLogger(__name__)

# Hours are optional; '.' and ',' are both accepted before the milliseconds
_TIMING_PATTERN = re.compile(
    r'^((?:\d+:)?\d{2}:\d{2}[.,]\d{3})\s+-->\s+((?:\d+:)?\d{2}:\d{2}[.,]\d{3})'
)
# Header and keyword blocks; the keyword must stand alone
_SKIPPED_BLOCK_PATTERN = re.compile(r'^(?:WEBVTT|NOTE|STYLE|REGION)(?:\s|$)')


class WebVTTParser:
    """
    Incremental WebVTT cue parser.

    Feed text with ``parse`` (any number of times), then call ``flush``.
    Each complete cue is passed to ``oncue``; ``onflush`` is called once all
    buffered text has been consumed. Malformed cues are omitted.

    A missing WEBVTT header is tolerated so that converted SRT content parses.
    """

    def __init__(self):
        self.oncue: Optional[Callable[[Cue], None]] = None
        self.onflush: Optional[Callable[[], None]] = None
        self._buffer = ""

    def parse(self, text: str) -> "WebVTTParser":
        self._buffer += text.replace('\r\n', '\n').replace('\r', '\n')
        # Only blocks terminated by a blank line are complete
        end = self._buffer.rfind('\n\n')
        if end != -1:
            complete, self._buffer = self._buffer[:end], self._buffer[end + 2:]
            self._parse_blocks(complete)
        return self

    feed = parse

    def flush(self) -> "WebVTTParser":
        remaining, self._buffer = self._buffer, ""
        self._parse_blocks(remaining)
        if self.onflush:
            self.onflush()
        return self

    def _parse_blocks(self, text: str) -> None:
        for block in text.split('\n\n'):
            lines = [line for line in block.split('\n') if line.strip()]
            if not lines:
                continue
            cue = self._parse_block(lines)
            if cue is not None and self.oncue:
                self.oncue(cue)

    def _parse_block(self, lines: List[str]) -> Optional[Cue]:
        if _SKIPPED_BLOCK_PATTERN.match(lines[0]):
            return None

        cue_id = ""
        match = _TIMING_PATTERN.match(lines[0].strip())
        text_start = 1
        if match is None and len(lines) > 1:
            match = _TIMING_PATTERN.match(lines[1].strip())
            cue_id = lines[0].strip()
            text_start = 2
        if match is None:
            logger.debug(f"Skipping block without timing line: {lines[0][:50]}")
            return None

        start_time = timestamp_to_seconds(match.group(1))
        end_time = timestamp_to_seconds(match.group(2))
        if end_time < start_time:
            logger.debug(f"Skipping cue ending before it starts: {lines[text_start - 1]}")
            return None

        return Cue(
            start_time=start_time,
            end_time=end_time,
            text='\n'.join(lines[text_start:]),
            id=cue_id,
        )


def parse_cues(text: str, parser_factory: Callable[[], WebVTTParser] = WebVTTParser) -> List[Cue]:
    """
    Parse caption text into cues using a push-style parser.

    Args:
        text: Caption content in VTT timing syntax
        parser_factory: Callable creating a parser with ``oncue``/``onflush``
            callbacks and ``parse``/``flush`` methods

    Returns:
        Cues in the order the parser emitted them

    Example:
        >>> cues = parse_cues("WEBVTT\\n\\n00:00:01.000 --> 00:00:03.000\\nHello world")
        >>> cues[0].start_time, cues[0].text
        (1.0, 'Hello world')
    """
    cues: List[Cue] = []
    flushed = []

    def on_flush() -> None:
        logger.debug("finished parsing external cues")
        flushed.append(True)

    parser = parser_factory()
    parser.oncue = cues.append
    parser.onflush = on_flush
    parser.parse(text)
    parser.flush()

    if not flushed:
        raise RuntimeError("Cue parser did not signal flush completion")
    return cues
