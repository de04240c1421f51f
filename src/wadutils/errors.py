# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Exception types raised by the WAD tools.

File system failures are reported with Python's own OSError family and are
not wrapped.
"""


class WadError(Exception):
    """
    Base class for all WAD tool errors.
    """


class FormatError(WadError, ValueError):
    """
    Raised when binary data does not match the expected layout
    (bad WAD magic, truncated directory, malformed MUS stream).
    """


class ManifestError(WadError, ValueError):
    """
    Raised for a single unusable line of an index file.
    """


class ConversionError(WadError, ValueError):
    """
    Raised when an entry cannot be converted to a common media format.
    """
