"""
SRT to VTT timestamp conversion.

The rewrite is textual: any text matching the timing-line pattern is
rewritten, including a cue payload that happens to look like a timing line.
"""

import re

# The separator before the milliseconds matches any character, so lines that
# already use ',' are rewritten to themselves.
_SRT_TIMING_PATTERN = re.compile(r'(\d\d:\d\d:\d\d).(\d\d\d) --> (\d\d:\d\d:\d\d).(\d\d\d)')


def convert_srt_to_vtt(content: str) -> str:
    """
    Rewrite SRT timing lines into the timing syntax read by the cue parser.

    Args:
        content: Caption file content in SRT format

    Returns:
        Content with every timing pair as HH:MM:SS,mmm --> HH:MM:SS,mmm;
        everything else is left byte-identical.

    Example:
        >>> convert_srt_to_vtt("1\\n00:00:01.000 --> 00:00:02.500\\nHello\\n")
        '1\\n00:00:01,000 --> 00:00:02,500\\nHello\\n'
    """
    return _SRT_TIMING_PATTERN.sub(r'\1,\2 --> \3,\4', content)
