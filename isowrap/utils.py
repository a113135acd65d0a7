# Copyright (C) 2015-2020  Chris Lalancette <clalancette@gmail.com>

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation;
# version 2.1 of the License.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA

"""Various utilities for IsoWrap."""

import os
import re
import time

from isowrap import isowrapexception

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO  # NOQA pylint: disable=unused-import

MAX_ISO_NAME_LENGTH = 32

# The largest file that fits in the 32-bit data length of a Directory Record.
MAX_FILE_SIZE = 2**32 - 1

_ISO_NAME_RE = re.compile(b'[A-Z0-9_]+')


def ceiling_div(numer, denom):
    # type: (int, int) -> int
    """
    A function to do ceiling division; that is, dividing numerator by denominator
    and taking the ceiling.

    Parameters:
     numer - The numerator for the division.
     denom - The denominator for the division.
    Returns:
     The ceiling after dividing numerator by denominator.
    """
    # Upside-down floor division.
    return -(-numer // denom)


def gmtoffset_from_tm(tm, local):
    # type: (float, time.struct_time) -> int
    """
    A function to compute the GMT offset from the time in seconds since the epoch
    and the local time object.

    Parameters:
     tm - The time in seconds since the epoch.
     local - The struct_time object representing the local time.
    Returns:
     The gmtoffset, in 15 minute intervals.
    """
    gmtime = time.gmtime(tm)
    tmpyear = gmtime.tm_year - local.tm_year
    tmpyday = gmtime.tm_yday - local.tm_yday
    tmphour = gmtime.tm_hour - local.tm_hour
    tmpmin = gmtime.tm_min - local.tm_min

    if tmpyday < 0:
        tmpyday = -1
    else:
        if tmpyear > 0:
            tmpyday = 1
    return -(tmpmin + 60 * (tmphour + 24 * tmpyday)) // 15


def iso_name_from_path(path):
    # type: (str) -> bytes
    """
    A function to derive the ISO9660 identifier for a file from its path on
    the host.  The base name is upper-cased and truncated to 32 characters;
    it is not checked for validity here.

    Parameters:
     path - The host path to the file.
    Returns:
     The candidate identifier as bytes.
    """
    name = os.path.basename(path).upper()
    return name.encode('utf-8')[:MAX_ISO_NAME_LENGTH]


def name_satisfies_iso_constraints(name):
    # type: (bytes) -> bool
    """
    A function to check whether a name only uses the characters ISO9660
    allows for identifiers, namely capital letters, digits, and underscores.

    Parameters:
     name - The name to check.
    Returns:
     True if the name is acceptable, False otherwise.
    """
    return _ISO_NAME_RE.fullmatch(name) is not None


def check_iso_name(name, what):
    # type: (bytes, str) -> None
    """
    A function to validate an identifier, raising if it cannot be used.

    Parameters:
     name - The identifier to check.
     what - A description of the identifier for the error message.
    Returns:
     Nothing.
    """
    if len(name) > MAX_ISO_NAME_LENGTH:
        raise isowrapexception.IsoWrapInvalidInput('The %s has a maximum length of %d' % (what, MAX_ISO_NAME_LENGTH))
    if not name_satisfies_iso_constraints(name):
        raise isowrapexception.IsoWrapInvalidInput('The %s %s does not satisfy the ISO9660 character set constraints' % (what, name.decode('utf-8', 'replace')))


def file_size(fp):
    # type: (BinaryIO) -> int
    """
    A function to find out how big an open file is, without reading it.

    Parameters:
     fp - The file object to check.
    Returns:
     The size of the file in bytes.
    """
    try:
        size = os.fstat(fp.fileno()).st_size
    except OSError as exc:
        raise isowrapexception.IsoWrapIOError('Could not stat input file: %s' % (exc)) from exc

    if size > MAX_FILE_SIZE:
        raise isowrapexception.IsoWrapInvalidInput('File size %d is too large' % (size))

    return size
