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
Main IsoWrap class, which wraps a single file into an ISO9660 image.
'''

import logging
import time

from isowrap import dr
from isowrap import headervd
from isowrap import isowrapexception
from isowrap import layout
from isowrap import path_table_record
from isowrap import sectorwriter
from isowrap import utils

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO, Optional  # NOQA pylint: disable=unused-import

log = logging.getLogger(__name__)


def _read_chunk(infp, size):
    # type: (BinaryIO, int) -> bytes
    '''
    An internal function to read up to size bytes, retrying short reads so
    that only the final chunk of the input can be smaller than a sector.

    Parameters:
     infp - The file object to read from.
     size - The number of bytes wanted.
    Returns:
     The data read; empty at the end of the input.
    '''
    chunks = []
    left = size
    while left > 0:
        try:
            data = infp.read(left)
        except OSError as exc:
            raise isowrapexception.IsoWrapIOError('Could not read from input file: %s' % (exc)) from exc
        if not data:
            break
        chunks.append(data)
        left -= len(data)

    return b''.join(chunks)


class IsoWrap(object):
    '''
    The main class for wrapping a file into an image.  The whole image is
    produced in a single forward pass; the input is never held in memory
    beyond one sector.
    '''
    __slots__ = ('layout',)

    def __init__(self, layout_obj=None):
        # type: (Optional[layout.Layout]) -> None
        if layout_obj is None:
            layout_obj = layout.layout_factory()
        self.layout = layout_obj

    def _check_sector(self, writer, expected, what):
        # type: (sectorwriter.SectorWriter, int, str) -> None
        '''
        An internal method to make sure a structure went where the layout
        says it should.

        Parameters:
         writer - The SectorWriter in use.
         expected - The sector index the structure belongs in.
         what - The name of the structure, for the error message.
        Returns:
         Nothing.
        '''
        if writer.current_sector() != expected:
            raise isowrapexception.IsoWrapInternalError('Unexpected %s sector %d (expected %d)' % (what, writer.current_sector(), expected))
        log.debug('Writing %s at sector %d', what, expected)

    def _write_volume_descriptors(self, writer, total_sectors, vol_ident, tm):
        # type: (sectorwriter.SectorWriter, int, bytes, float) -> None
        '''
        An internal method to write the Primary Volume Descriptor and the
        Volume Descriptor Set Terminator.

        Parameters:
         writer - The SectorWriter in use.
         total_sectors - The precomputed size of the volume in sectors.
         vol_ident - The volume identifier.
         tm - The creation time of the image.
        Returns:
         Nothing.
        '''
        pvd = headervd.pvd_factory(total_sectors, self.layout, vol_ident, b'', tm)
        sector = writer.next_sector()
        self._check_sector(writer, self.layout.pvd_sector, 'primary volume descriptor')
        pvd.write(sector)

        vdst = headervd.vdst_factory()
        sector = writer.next_sector()
        self._check_sector(writer, self.layout.terminator_sector, 'volume descriptor set terminator')
        vdst.write(sector)

    def _write_path_tables(self, writer):
        # type: (sectorwriter.SectorWriter) -> None
        '''
        An internal method to write the little-endian and big-endian Path
        Tables, one sector each.

        Parameters:
         writer - The SectorWriter in use.
        Returns:
         Nothing.
        '''
        ptr = path_table_record.root_ptr_factory(self.layout.root_dir_sector)

        sector = writer.next_sector()
        self._check_sector(writer, self.layout.ptr_le_sector, 'little-endian path table')
        ptr.write(sector, 'little')

        sector = writer.next_sector()
        self._check_sector(writer, self.layout.ptr_be_sector, 'big-endian path table')
        ptr.write(sector, 'big')

    def _write_root_directory(self, writer, name, file_size, tm):
        # type: (sectorwriter.SectorWriter, bytes, int, float) -> None
        '''
        An internal method to write the root directory, which holds the dot
        and dotdot entries followed by the entry for the file.

        Parameters:
         writer - The SectorWriter in use.
         name - The ISO9660 name of the file.
         file_size - The size of the file in bytes.
         tm - The recording time of the entries.
        Returns:
         Nothing.
        '''
        sector = writer.next_sector()
        self._check_sector(writer, self.layout.root_dir_sector, 'root directory')

        root_extent = writer.current_sector()
        dr.dot_factory(root_extent, self.layout.sector_size, tm).write(sector)
        dr.dotdot_factory(root_extent, self.layout.sector_size, tm).write(sector)
        dr.file_factory(name, self.layout.first_data_sector, file_size, tm).write(sector)

    def _write_data(self, writer, infp, file_size):
        # type: (sectorwriter.SectorWriter, BinaryIO, int) -> int
        '''
        An internal method to stream the file contents into the data sectors.

        Parameters:
         writer - The SectorWriter in use.
         infp - The file object to read the file contents from.
         file_size - The size of the file observed before writing started.
        Returns:
         The number of bytes read from the input.
        '''
        sector_size = self.layout.sector_size
        total = 0
        while True:
            data = _read_chunk(infp, sector_size)
            if not data:
                break
            if total + len(data) > file_size:
                # Stop before writing past the space recorded in the PVD.
                raise isowrapexception.IsoWrapInternalError('Input file size grew while the ISO file was being created (expected to read %d, read at least %d)' % (file_size, total + len(data)))
            sector = writer.next_sector()
            if total == 0:
                self._check_sector(writer, self.layout.first_data_sector, 'file data')
            sector.write(data)
            total += len(data)

        if total == 0:
            # An empty file still gets a (zero-filled) data sector.
            writer.next_sector()
            self._check_sector(writer, self.layout.first_data_sector, 'empty file data')

        if total != file_size:
            raise isowrapexception.IsoWrapInternalError('Input file size changed while the ISO file was being created (expected to read %d, read %d)' % (file_size, total))

        last_sector = self.layout.last_sector(file_size)
        if writer.current_sector() != last_sector:
            raise isowrapexception.IsoWrapInternalError('Unexpected last sector number (expected %d, actual %d)' % (last_sector, writer.current_sector()))

        return total

    def wrap_fp(self, infp, outfp, file_size, name, vol_ident=b'', tm=None):
        # type: (BinaryIO, BinaryIO, int, bytes, bytes, Optional[float]) -> int
        '''
        Write an image holding a single file to a file object.  The output
        file object must already be positioned just past the System Area, and
        the input must be positioned at its start.

        Parameters:
         infp - The file object to read the file contents from.
         outfp - The file object to write the image to.
         file_size - The size of the input, as observed before calling.
         name - The ISO9660 name of the file.
         vol_ident - The volume identifier; blank by default.
         tm - The time to record on the image, or None for now.
        Returns:
         The total number of sectors in the image.
        '''
        utils.check_iso_name(name, 'file name')
        if file_size < 0 or file_size > utils.MAX_FILE_SIZE:
            raise isowrapexception.IsoWrapInvalidInput('File size %d is out of range' % (file_size))

        if tm is None:
            tm = time.time()

        # The volume size has to be recorded before any data is streamed, so
        # it is computed from the observed size and checked at the end.
        total_sectors = self.layout.total_sectors(file_size)
        log.debug('Image for %s (%d bytes) will be %d sectors', name.decode('ascii'), file_size, total_sectors)

        writer = sectorwriter.SectorWriter(outfp, self.layout)
        self._write_volume_descriptors(writer, total_sectors, vol_ident, tm)
        self._write_path_tables(writer)
        self._write_root_directory(writer, name, file_size, tm)
        self._write_data(writer, infp, file_size)
        writer.finish()

        return total_sectors

    def wrap(self, infile, outfile, vol_ident=b''):
        # type: (str, str, bytes) -> int
        '''
        Write an image holding a single file to a new file on disk.  The name
        of the file on the image is derived from the name of the input file.
        An existing output file is never overwritten.

        Parameters:
         infile - The path of the file to put on the image.
         outfile - The path of the image to create.
         vol_ident - The volume identifier; blank by default.
        Returns:
         The total number of sectors in the image.
        '''
        name = utils.iso_name_from_path(infile)
        utils.check_iso_name(name, 'input file name')
        if vol_ident:
            utils.check_iso_name(vol_ident, 'volume identifier')

        try:
            infp = open(infile, 'rb')
        except FileNotFoundError as exc:
            raise isowrapexception.IsoWrapUsageError('Input file %s does not exist' % (infile)) from exc
        except OSError as exc:
            raise isowrapexception.IsoWrapIOError('Could not open input file %s for reading: %s' % (infile, exc)) from exc

        with infp:
            file_size = utils.file_size(infp)

            try:
                outfp = open(outfile, 'xb')
            except OSError as exc:
                raise isowrapexception.IsoWrapIOError('Could not open output file %s for writing: %s' % (outfile, exc)) from exc

            with outfp:
                try:
                    outfp.seek(self.layout.system_area_sectors * self.layout.sector_size)
                except OSError as exc:
                    raise isowrapexception.IsoWrapIOError('Could not seek output file: %s' % (exc)) from exc

                total_sectors = self.wrap_fp(infp, outfp, file_size, name, vol_ident)

        log.info('Wrote %s as %s into %s (%d sectors, %d bytes)', infile, name.decode('ascii'), outfile, total_sectors, self.layout.image_size(file_size))
        return total_sectors
