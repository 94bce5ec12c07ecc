"""Event severities.

Values follow the OpenTelemetry log data model severity numbers so records
map one-to-one onto logs-API records.
"""

from enum import IntEnum


class Severity(IntEnum):
    """Severity of an emitted event."""

    TRACE = 1
    DEBUG = 5
    INFO = 9
    WARN = 13
    ERROR = 17
    FATAL = 21

    @property
    def text(self) -> str:
        """Canonical text form ("TRACE" ... "FATAL")."""
        return self.name
