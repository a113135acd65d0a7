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

'''
Classes to write an ISO9660 image one whole sector at a time.
'''

import struct

from isowrap import dates
from isowrap import isowrapexception

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO, Optional, Union  # NOQA pylint: disable=unused-import
    # NOTE: these imports have to be here to avoid circular deps
    from isowrap import layout  # NOQA pylint: disable=unused-import

# The filler for identifier fields that are left (partially) empty.
FILLER_BYTE = b'\x00'

_WORD_FMTS = {'little': '<H', 'big': '>H'}
_DWORD_FMTS = {'little': '<L', 'big': '>L'}


def _check_range(value, bits):
    # type: (int, int) -> None
    '''
    An internal function to make sure an integer fits in an unsigned field of
    the given width.

    Parameters:
     value - The integer to check.
     bits - The width of the field in bits.
    Returns:
     Nothing.
    '''
    if value < 0 or value >= (1 << bits):
        raise isowrapexception.IsoWrapInternalError('Value %d does not fit in an unsigned %d-bit field' % (value, bits))


class Sector(object):
    '''
    A class that accumulates the contents of a single sector.  Sectors are
    handed out by SectorWriter.next_sector(), and can only be written to
    until the writer moves on to the next sector.
    '''
    __slots__ = ('_number', '_size', '_buf', '_closed')

    def __init__(self, number, size):
        # type: (int, int) -> None
        self._number = number
        self._size = size
        self._buf = bytearray()
        self._closed = False

    def _append(self, data):
        # type: (bytes) -> None
        '''
        The one place data enters the sector buffer.  Anything that does not
        fit means the layout was computed wrong, so it is refused outright
        rather than spilled over into the next sector.

        Parameters:
         data - The bytes to add.
        Returns:
         Nothing.
        '''
        if self._closed:
            raise isowrapexception.IsoWrapInternalError('Sector %d is no longer current' % (self._number))

        if len(self._buf) + len(data) > self._size:
            raise isowrapexception.IsoWrapInternalError('Sector %d overflow (%d bytes used, %d more requested, size %d)' % (self._number, len(self._buf), len(data), self._size))

        self._buf.extend(data)

    @property
    def number(self):
        # type: () -> int
        '''The index of this sector on the image.'''
        return self._number

    def tell(self):
        # type: () -> int
        '''
        Get the number of bytes written into this sector so far.

        Parameters:
         None.
        Returns:
         The offset of the next byte within the sector.
        '''
        return len(self._buf)

    def remaining(self):
        # type: () -> int
        '''
        Get the number of bytes still free in this sector.

        Parameters:
         None.
        Returns:
         The number of free bytes.
        '''
        return self._size - len(self._buf)

    def write(self, data):
        # type: (bytes) -> None
        '''
        Write raw bytes to the sector.

        Parameters:
         data - The bytes to write.
        Returns:
         Nothing.
        '''
        self._append(bytes(data))

    def write_byte(self, value):
        # type: (int) -> None
        '''
        Write a single unsigned byte to the sector.

        Parameters:
         value - The value of the byte.
        Returns:
         Nothing.
        '''
        _check_range(value, 8)
        self._append(struct.pack('=B', value))

    def write_string(self, text):
        # type: (Union[str, bytes]) -> None
        '''
        Write a string to the sector, exactly as long as it is.

        Parameters:
         text - The string to write; str objects must be plain ASCII.
        Returns:
         Nothing.
        '''
        if isinstance(text, str):
            text = text.encode('ascii')
        self._append(text)

    def write_word(self, value, byteorder):
        # type: (int, str) -> None
        '''
        Write a 16-bit unsigned integer in the given byte order.

        Parameters:
         value - The value to write.
         byteorder - Either 'little' or 'big'.
        Returns:
         Nothing.
        '''
        if byteorder not in _WORD_FMTS:
            raise isowrapexception.IsoWrapInternalError('Invalid byte order %s' % (byteorder))
        _check_range(value, 16)
        self._append(struct.pack(_WORD_FMTS[byteorder], value))

    def write_dword(self, value, byteorder):
        # type: (int, str) -> None
        '''
        Write a 32-bit unsigned integer in the given byte order.

        Parameters:
         value - The value to write.
         byteorder - Either 'little' or 'big'.
        Returns:
         Nothing.
        '''
        if byteorder not in _DWORD_FMTS:
            raise isowrapexception.IsoWrapInternalError('Invalid byte order %s' % (byteorder))
        _check_range(value, 32)
        self._append(struct.pack(_DWORD_FMTS[byteorder], value))

    def write_little_endian_word(self, value):
        # type: (int) -> None
        '''Write a 16-bit little-endian unsigned integer.'''
        self.write_word(value, 'little')

    def write_big_endian_word(self, value):
        # type: (int) -> None
        '''Write a 16-bit big-endian unsigned integer.'''
        self.write_word(value, 'big')

    def write_little_endian_dword(self, value):
        # type: (int) -> None
        '''Write a 32-bit little-endian unsigned integer.'''
        self.write_dword(value, 'little')

    def write_big_endian_dword(self, value):
        # type: (int) -> None
        '''Write a 32-bit big-endian unsigned integer.'''
        self.write_dword(value, 'big')

    def write_both_endian_word(self, value):
        # type: (int) -> None
        '''
        Write a 16-bit value in both-byte order (Ecma-119 7.2.3); the
        little-endian copy comes first, for 4 bytes in total.

        Parameters:
         value - The value to write.
        Returns:
         Nothing.
        '''
        _check_range(value, 16)
        self._append(struct.pack('<H', value) + struct.pack('>H', value))

    def write_both_endian_dword(self, value):
        # type: (int) -> None
        '''
        Write a 32-bit value in both-byte order (Ecma-119 7.3.3); the
        little-endian copy comes first, for 8 bytes in total.

        Parameters:
         value - The value to write.
        Returns:
         Nothing.
        '''
        _check_range(value, 32)
        self._append(struct.pack('<L', value) + struct.pack('>L', value))

    def write_padded_string(self, text, length):
        # type: (Union[str, bytes], int) -> None
        '''
        Write a string into a fixed-length field.  The string is left-aligned
        and the rest of the field is filled with FILLER_BYTE; a string longer
        than the field is cut off.

        Parameters:
         text - The string to write.
         length - The size of the field.
        Returns:
         Nothing.
        '''
        if isinstance(text, str):
            text = text.encode('ascii')
        self._append(text[:length].ljust(length, FILLER_BYTE))

    def write_zeros(self, count):
        # type: (int) -> None
        '''
        Write a run of zero bytes.

        Parameters:
         count - The number of zero bytes.
        Returns:
         Nothing.
        '''
        self._append(b'\x00' * count)

    def write_date_time(self, tm):
        # type: (float) -> None
        '''
        Write a 17-byte Volume Descriptor date for the given instant.

        Parameters:
         tm - The time in seconds since the epoch.
        Returns:
         Nothing.
        '''
        date = dates.VolumeDescriptorDate()
        date.new(tm)
        self._append(date.record())

    def write_unspecified_date_time(self):
        # type: () -> None
        '''
        Write a 17-byte Volume Descriptor date meaning 'not specified'.

        Parameters:
         None.
        Returns:
         Nothing.
        '''
        date = dates.VolumeDescriptorDate()
        date.new()
        self._append(date.record())

    def write_dir_date_time(self, tm):
        # type: (float) -> None
        '''
        Write a 7-byte Directory Record date for the given instant.

        Parameters:
         tm - The time in seconds since the epoch.
        Returns:
         Nothing.
        '''
        date = dates.DirectoryRecordDate()
        date.new(tm)
        self._append(date.record())

    def pad_with_zeros(self):
        # type: () -> None
        '''
        Fill the rest of the sector with zeros.

        Parameters:
         None.
        Returns:
         Nothing.
        '''
        self._append(b'\x00' * self.remaining())

    def close(self):
        # type: () -> bytes
        '''
        Pad the sector and stop accepting writes.

        Parameters:
         None.
        Returns:
         The complete contents of the sector.
        '''
        self.pad_with_zeros()
        self._closed = True
        return bytes(self._buf)


class SectorWriter(object):
    '''
    A class that writes an image out as a sequence of whole sectors.  The
    output file object is expected to already be positioned at the first
    sector after the System Area.
    '''
    __slots__ = ('_outfp', '_sector_size', '_current_sector', '_sector',
                 '_finished')

    def __init__(self, outfp, layout_obj):
        # type: (BinaryIO, layout.Layout) -> None
        self._outfp = outfp
        self._sector_size = layout_obj.sector_size
        # The first call to next_sector() lands on the first sector after
        # the System Area.
        self._current_sector = layout_obj.system_area_sectors - 1
        self._sector = None  # type: Optional[Sector]
        self._finished = False

    def _flush_sector(self):
        # type: () -> None
        '''
        An internal method to pad the open sector and write it out.

        Parameters:
         None.
        Returns:
         Nothing.
        '''
        if self._sector is None:
            return

        data = self._sector.close()
        self._sector = None
        if len(data) != self._sector_size:
            raise isowrapexception.IsoWrapInternalError('Sector %d is %d bytes, expected %d' % (self._current_sector, len(data), self._sector_size))

        try:
            self._outfp.write(data)
        except OSError as exc:
            raise isowrapexception.IsoWrapIOError('Could not write to output file: %s' % (exc)) from exc

    def next_sector(self):
        # type: () -> Sector
        '''
        Finish off the current sector, if any, and move on to the next one.

        Parameters:
         None.
        Returns:
         The Sector object to write the new sector's contents into.
        '''
        if self._finished:
            raise isowrapexception.IsoWrapInternalError('Sector Writer already finished')

        self._flush_sector()
        self._current_sector += 1
        self._sector = Sector(self._current_sector, self._sector_size)
        return self._sector

    def current_sector(self):
        # type: () -> int
        '''
        Get the index of the sector currently being written.

        Parameters:
         None.
        Returns:
         The sector index.
        '''
        return self._current_sector

    def finish(self):
        # type: () -> None
        '''
        Pad and write out the last sector, then flush the output.

        Parameters:
         None.
        Returns:
         Nothing.
        '''
        if self._finished:
            raise isowrapexception.IsoWrapInternalError('Sector Writer already finished')

        self._flush_sector()
        self._finished = True
        try:
            self._outfp.flush()
        except OSError as exc:
            raise isowrapexception.IsoWrapIOError('Could not write to output file: %s' % (exc)) from exc
