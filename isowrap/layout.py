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
The fixed sector layout of an image holding a single file.
'''

from isowrap import isowrapexception
from isowrap import utils

# Ecma-119 6.1.2; the only logical block size we produce.
ISO_SECTOR_SIZE = 2048

# Ecma-119 6.2.1; sectors 0 through 15 are the System Area.
SYSTEM_AREA_SECTORS = 16


class Layout(object):
    '''
    A class describing where every structure of the image lives.  Apart from
    the data sectors, all positions are fixed:

     16 - Primary Volume Descriptor
     17 - Volume Descriptor Set Terminator
     18 - Little-endian Path Table
     19 - Big-endian Path Table
     20 - Root directory (dot, dotdot, and the file)
     21 - First sector of file data
    '''
    __slots__ = ('sector_size', 'system_area_sectors', 'pvd_sector',
                 'terminator_sector', 'ptr_le_sector', 'ptr_be_sector',
                 'root_dir_sector', 'first_data_sector', 'path_table_size')

    def __init__(self, sector_size=ISO_SECTOR_SIZE,
                 system_area_sectors=SYSTEM_AREA_SECTORS):
        # type: (int, int) -> None
        if sector_size != ISO_SECTOR_SIZE:
            raise isowrapexception.IsoWrapInvalidInput('Only a sector size of %d is supported' % (ISO_SECTOR_SIZE))
        if system_area_sectors != SYSTEM_AREA_SECTORS:
            raise isowrapexception.IsoWrapInvalidInput('The system area must be %d sectors' % (SYSTEM_AREA_SECTORS))

        self.sector_size = sector_size
        self.system_area_sectors = system_area_sectors
        self.pvd_sector = system_area_sectors
        self.terminator_sector = self.pvd_sector + 1
        self.ptr_le_sector = self.terminator_sector + 1
        self.ptr_be_sector = self.ptr_le_sector + 1
        self.root_dir_sector = self.ptr_be_sector + 1
        self.first_data_sector = self.root_dir_sector + 1
        # Each path table occupies exactly one sector.
        self.path_table_size = sector_size

    @property
    def fixed_header_sectors(self):
        # type: () -> int
        '''
        The number of sectors, System Area included, before the file data.
        '''
        return self.first_data_sector

    def data_sectors(self, file_size):
        # type: (int) -> int
        '''
        A method to compute how many sectors the file data occupies.  An empty
        file still gets one (zero-filled) sector.

        Parameters:
         file_size - The size of the input file in bytes.
        Returns:
         The number of data sectors.
        '''
        if file_size < 0:
            raise isowrapexception.IsoWrapInternalError('Negative file size %d' % (file_size))

        return max(1, utils.ceiling_div(file_size, self.sector_size))

    def total_sectors(self, file_size):
        # type: (int) -> int
        '''
        A method to compute the total number of sectors in the image, which is
        what gets recorded as the volume space size.

        Parameters:
         file_size - The size of the input file in bytes.
        Returns:
         The total number of sectors.
        '''
        return self.fixed_header_sectors + self.data_sectors(file_size)

    def last_sector(self, file_size):
        # type: (int) -> int
        '''
        A method to compute the index of the last sector of the image.

        Parameters:
         file_size - The size of the input file in bytes.
        Returns:
         The index of the last sector.
        '''
        return self.total_sectors(file_size) - 1

    def image_size(self, file_size):
        # type: (int) -> int
        '''
        A method to compute the size of the finished image in bytes.

        Parameters:
         file_size - The size of the input file in bytes.
        Returns:
         The size of the image in bytes.
        '''
        return self.total_sectors(file_size) * self.sector_size


def layout_factory():
    # type: () -> Layout
    '''
    An internal function to create the standard layout.

    Parameters:
     None.
    Returns:
     The Layout object.
    '''
    return Layout()
