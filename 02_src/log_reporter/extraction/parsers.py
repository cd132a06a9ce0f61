"""Parsers for drain syslog lines and logfmt-style key/value text."""

import re
from datetime import datetime

from ..models import LogKind, LogLine

_SYSLOG_LINE = re.compile(
    r"""
    \s*<(?P<priority>\d{1,3})>\d{1,2}
    [ ](?P<timestamp>\S+)
    [ ](?P<hostname>\S+)
    [ ](?P<kind>heroku|app)
    [ ](?P<source>\S+)
    [ ]-
    (?:[ ](?P<text>.*))?
    """,
    re.VERBOSE | re.DOTALL,
)

_PAIR = re.compile(r'\s*(?P<key>[\w#-]+)=(?:"(?P<quoted>[^"]*)"|(?P<bare>\S+))\s*')


def parse_log_line(text: str) -> LogLine | None:
    """
    Parse the syslog envelope of one drain frame.

    Format like:
        <158>1 2022-12-05T08:59:21.850424+00:00 host heroku router - at=info ...

    Returns None when the frame is not a platform or app log line, or when
    its timestamp is not valid ISO-8601.
    """
    match = _SYSLOG_LINE.fullmatch(text)
    if not match:
        return None

    try:
        timestamp = datetime.fromisoformat(match["timestamp"])
    except ValueError:
        return None

    return LogLine(
        priority=int(match["priority"]),
        timestamp=timestamp,
        hostname=match["hostname"],
        kind=LogKind(match["kind"]),
        source=match["source"],
        text=(match["text"] or "").strip(),
    )


def parse_key_value_pairs(text: str) -> tuple[dict[str, str], str]:
    """
    Parse leading ``key=value`` pairs.

    Values are either double-quoted (spaces allowed) or a run of
    non-whitespace. Parsing stops at the first token that is not a pair.

    Returns:
        The pairs found and the unparsed remainder of the text.
    """
    pairs: dict[str, str] = {}
    pos = 0
    while pos < len(text):
        match = _PAIR.match(text, pos)
        if not match:
            break
        value = match["quoted"]
        pairs[match["key"]] = value if value is not None else match["bare"]
        pos = match.end()
    return pairs, text[pos:].lstrip()
