"""Error taxonomy shared by the domain, infrastructure, and service layers.

Services catch these at their boundary and convert them into a failed
ServiceResult; they never reach a human as a raw exception.
"""

from __future__ import annotations


class SfmcpError(Exception):
    """Base class for all sfmcp errors.

    ``code`` is the ServiceError code used when the error is reported.
    """

    code = "ERROR"


class ParseError(SfmcpError):
    """A manifest document is malformed or missing required structure."""

    code = "PARSE_ERROR"


class InvalidFilterSpec(SfmcpError):
    """Filter parameters violate the caller contract (e.g. a non-positive quota)."""

    code = "INVALID_FILTER_SPEC"


class ExternalCommandFailure(SfmcpError):
    """The external CLI reported a failure. The message is kept verbatim."""

    code = "EXTERNAL_COMMAND_FAILURE"


class FileSystemError(SfmcpError):
    """A path is missing, unreadable, or unwritable."""

    code = "FILESYSTEM_ERROR"
