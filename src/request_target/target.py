"""Classify the request-target token of an HTTP request line.

A request target appears in every HTTP/1.1 start line (RFC 7230 section 5.3) in
one of four forms. :func:`classify` reports which one, as a hint for how the
target should be parsed further. It does not check that the matched string is
well-formed for that form.

    >>> classify("/r/rust")
    <RequestTargetKind.ABS_PATH: 'abs_path'>
    >>> classify("https://example.com")
    <RequestTargetKind.ABS_URI: 'abs_uri'>
    >>> classify("example.com")
    <RequestTargetKind.AUTHORITY: 'authority'>
    >>> classify("*")
    <RequestTargetKind.SERVER_OPTIONS: 'server_options'>
"""

from __future__ import annotations

from enum import Enum

# Unicode White_Space property. str.strip() without arguments also drops
# U+001C..U+001F, which are not whitespace here.
WHITESPACE = (
    "\t\n\x0b\x0c\r\x20\x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)

URI_PREFIXES = ("http://", "https://")

REASON_EMPTY = "empty"
REASON_WHITESPACE = "surrounding whitespace"
REASON_UNRECOGNIZED = "unrecognized form"


class InvalidTarget(ValueError):
    """Raised when a string matches none of the request-target forms."""

    def __init__(self, target: str, reason: str = REASON_UNRECOGNIZED):
        super().__init__(f"invalid request target {target!r}: {reason}")
        self.target = target
        self.reason = reason


class RequestTargetKind(str, Enum):
    #: General form for direct requests to a resource on the origin server.
    ABS_PATH = "abs_path"
    #: Mostly used with proxies, but HTTP/1.1 servers must accept it for any request.
    ABS_URI = "abs_uri"
    #: Used with CONNECT in the proxy protocol.
    AUTHORITY = "authority"
    #: Used for a server-wide OPTIONS request.
    SERVER_OPTIONS = "server_options"

    @classmethod
    def parse(cls, target: str) -> "RequestTargetKind":
        return classify(target)


def classify(target: str) -> RequestTargetKind:
    if not isinstance(target, str):
        raise TypeError(f"request target must be str, got {type(target).__name__}")

    # Surrounding whitespace and the empty string are invalid [RFC7230 3.1.1, 5.3].
    if not target:
        raise InvalidTarget(target, REASON_EMPTY)
    if target != target.strip(WHITESPACE):
        raise InvalidTarget(target, REASON_WHITESPACE)

    if target == "*":
        # asterisk-form is only the asterisk [RFC7230 5.3.4]
        return RequestTargetKind.SERVER_OPTIONS
    if target.startswith("/"):
        # origin-form always starts with a slash [RFC7230 5.3.1]
        return RequestTargetKind.ABS_PATH
    if target.startswith(URI_PREFIXES):
        # absolute-form, http and https schemes only [RFC7230 5.3.2]
        return RequestTargetKind.ABS_URI
    if "/" not in target:
        # authority-form has no slashes [RFC7230 5.3.3]
        return RequestTargetKind.AUTHORITY
    raise InvalidTarget(target, REASON_UNRECOGNIZED)
