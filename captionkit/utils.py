"""
Shared utility functions for CaptionKit.

Timestamp conversion and caption URL classification.
"""

import re

VTT_POSTFIX = "vtt"
SRT_POSTFIX = "srt"

_URL_SUFFIX_PATTERN = re.compile(r'[#?]')


def timestamp_to_seconds(timestamp: str) -> float:
    """
    Convert [HH:]MM:SS.mmm format to seconds.

    Both '.' and ',' are accepted before the millisecond field, so SRT-style
    timestamps convert as well.

    Args:
        timestamp: Timestamp string

    Returns:
        Time in seconds as float

    Example:
        >>> timestamp_to_seconds("00:01:30.500")
        90.5
        >>> timestamp_to_seconds("00:01:30,500")
        90.5
    """
    parts = timestamp.strip().replace(',', '.').split(':')
    if len(parts) == 2:
        parts.insert(0, '0')
    h, m, s = parts
    return int(h) * 3600 + int(m) * 60 + float(s)


def seconds_to_timestamp(seconds: float) -> str:
    """
    Convert seconds to HH:MM:SS.mmm format.

    Example:
        >>> seconds_to_timestamp(90.5)
        '00:01:30.500'
    """
    total_ms = int(round(seconds * 1000))
    hours, rem = divmod(total_ms, 3600 * 1000)
    minutes, rem = divmod(rem, 60 * 1000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"


def get_file_type(url: str) -> str:
    """
    Get the file extension of a caption URL.

    The fragment and query are stripped and surrounding whitespace trimmed;
    case is left as-is.

    Example:
        >>> get_file_type("https://example.com/subs/en.srt?token=abc")
        'srt'
    """
    path = _URL_SUFFIX_PATTERN.split(url, maxsplit=1)[0]
    return path.split('.')[-1].strip()
