"""
Schedule source errors

Every failure reaching or reading the upstream schedule API is reported as a
ScheduleSourceError subclass so callers can render a fallback state instead
of crashing. Empty results are never errors.
"""


class ScheduleSourceError(Exception):
    """Base class for recoverable schedule source failures"""

    code = "SOURCE_ERROR"


class TransportError(ScheduleSourceError):
    """Raised when the API cannot be reached (connection, timeout, HTTP status)"""

    code = "TRANSPORT_ERROR"


class ParseError(ScheduleSourceError):
    """Raised when the API answered but the XML is malformed or incomplete"""

    code = "PARSE_ERROR"
