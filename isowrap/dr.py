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

"""
The class to support ISO9660 Directory Records.
"""

import struct

from isowrap import dates
from isowrap import isowrapexception
from isowrap import utils

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import Optional  # NOQA pylint: disable=unused-import
    # NOTE: these imports have to be here to avoid circular deps
    from isowrap import sectorwriter  # NOQA pylint: disable=unused-import

DOT_IDENTIFIER = b'\x00'
DOTDOT_IDENTIFIER = b'\x01'


class DirectoryRecord(object):
    """A class that represents an ISO9660 directory record."""
    __slots__ = ('_initialized', 'dr_len', 'xattr_len', 'extent_location',
                 'data_length', 'date', 'file_flags', 'file_unit_size',
                 'interleave_gap_size', 'seqnum', 'len_fi', 'file_ident',
                 'isdir')

    FILE_FLAG_EXISTENCE_BIT = 0
    FILE_FLAG_DIRECTORY_BIT = 1

    FMT = '<BBLLLL7sBBBHHB'

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def _new(self, name, extent, length, isdir, tm):
        # type: (bytes, int, int, bool, Optional[float]) -> None
        """
        Internal method to create a new Directory Record.

        Parameters:
         name - The identifier for this directory record.
         extent - The first sector of the data described by this record.
         length - The length of the data for this directory record.
         isdir - Whether this directory record represents a directory.
         tm - The recording time, or None for the current time.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise isowrapexception.IsoWrapInternalError('Directory Record already initialized')

        if length > utils.MAX_FILE_SIZE:
            raise isowrapexception.IsoWrapInvalidInput('Maximum supported file length is 2^32-1')

        self.date = dates.DirectoryRecordDate()
        self.date.new(tm)

        self.extent_location = extent
        self.data_length = length
        self.file_ident = name
        self.isdir = isdir
        self.seqnum = 1
        self.len_fi = len(self.file_ident)
        self.dr_len = struct.calcsize(self.FMT) + self.len_fi
        # Ecma-119 9.1.12; the record as a whole has an even length.
        self.dr_len += (self.dr_len % 2)

        # Ecma-119 9.1.6; of the file flags only 'directory' is ever set.
        self.file_flags = 0
        if self.isdir:
            self.file_flags |= (1 << self.FILE_FLAG_DIRECTORY_BIT)
        self.file_unit_size = 0
        self.interleave_gap_size = 0
        self.xattr_len = 0

        self._initialized = True

    def new_root(self, extent, length, tm=None):
        # type: (int, int, Optional[float]) -> None
        """
        Create a new root Directory Record, as embedded in the Primary Volume
        Descriptor.

        Parameters:
         extent - The sector holding the root directory.
         length - The length of the root directory.
         tm - The recording time, or None for the current time.
        Returns:
         Nothing.
        """
        self._new(DOT_IDENTIFIER, extent, length, True, tm)

    def new_dot(self, extent, length, tm=None):
        # type: (int, int, Optional[float]) -> None
        """
        Create a new 'dot' Directory Record.

        Parameters:
         extent - The sector holding the directory itself.
         length - The length of the directory.
         tm - The recording time, or None for the current time.
        Returns:
         Nothing.
        """
        self._new(DOT_IDENTIFIER, extent, length, True, tm)

    def new_dotdot(self, extent, length, tm=None):
        # type: (int, int, Optional[float]) -> None
        """
        Create a new 'dotdot' Directory Record.  The root directory is its own
        parent, so this points at the same extent as 'dot'.

        Parameters:
         extent - The sector holding the parent directory.
         length - The length of the parent directory.
         tm - The recording time, or None for the current time.
        Returns:
         Nothing.
        """
        self._new(DOTDOT_IDENTIFIER, extent, length, True, tm)

    def new_file(self, name, extent, length, tm=None):
        # type: (bytes, int, int, Optional[float]) -> None
        """
        Create a new file Directory Record.

        Parameters:
         name - The ISO9660 name of the file.
         extent - The first sector of the file data.
         length - The length of the file in bytes.
         tm - The recording time, or None for the current time.
        Returns:
         Nothing.
        """
        if not name:
            raise isowrapexception.IsoWrapInvalidInput('A file must have a name')

        self._new(name, extent, length, False, tm)

    def write(self, sector):
        # type: (sectorwriter.Sector) -> None
        """
        Write this Directory Record into a sector.

        Parameters:
         sector - The Sector object to write into.
        Returns:
         Nothing.
        """
        if not self._initialized:
            raise isowrapexception.IsoWrapInternalError('Directory Record not initialized')

        start = sector.tell()
        sector.write_byte(self.dr_len)
        sector.write_byte(self.xattr_len)
        sector.write_both_endian_dword(self.extent_location)
        sector.write_both_endian_dword(self.data_length)
        sector.write(self.date.record())
        sector.write_byte(self.file_flags)
        sector.write_byte(self.file_unit_size)
        sector.write_byte(self.interleave_gap_size)
        sector.write_both_endian_word(self.seqnum)
        sector.write_byte(self.len_fi)
        sector.write(self.file_ident)
        sector.write_zeros(self.dr_len - (sector.tell() - start))


def dot_factory(extent, length, tm=None):
    # type: (int, int, Optional[float]) -> DirectoryRecord
    """
    An internal function to create a new 'dot' Directory Record.

    Parameters:
     extent - The sector holding the directory.
     length - The length of the directory.
     tm - The recording time, or None for the current time.
    Returns:
     The new Directory Record.
    """
    rec = DirectoryRecord()
    rec.new_dot(extent, length, tm)
    return rec


def dotdot_factory(extent, length, tm=None):
    # type: (int, int, Optional[float]) -> DirectoryRecord
    """
    An internal function to create a new 'dotdot' Directory Record.

    Parameters:
     extent - The sector holding the parent directory.
     length - The length of the parent directory.
     tm - The recording time, or None for the current time.
    Returns:
     The new Directory Record.
    """
    rec = DirectoryRecord()
    rec.new_dotdot(extent, length, tm)
    return rec


def file_factory(name, extent, length, tm=None):
    # type: (bytes, int, int, Optional[float]) -> DirectoryRecord
    """
    An internal function to create a new file Directory Record.

    Parameters:
     name - The ISO9660 name of the file.
     extent - The first sector of the file data.
     length - The length of the file in bytes.
     tm - The recording time, or None for the current time.
    Returns:
     The new Directory Record.
    """
    rec = DirectoryRecord()
    rec.new_file(name, extent, length, tm)
    return rec
