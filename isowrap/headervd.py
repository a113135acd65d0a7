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
Implementation of the Volume Descriptors written at the front of an image.
'''

import time

from isowrap import dr
from isowrap import isowrapexception

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import Optional  # NOQA pylint: disable=unused-import
    # NOTE: these imports have to be here to avoid circular deps
    from isowrap import layout  # NOQA pylint: disable=unused-import
    from isowrap import sectorwriter  # NOQA pylint: disable=unused-import

VOLUME_DESCRIPTOR_TYPE_PRIMARY = 1
VOLUME_DESCRIPTOR_TYPE_SET_TERMINATOR = 255

# Ecma-119 8.1.2
STANDARD_IDENTIFIER = b'CD001'
VOLUME_DESCRIPTOR_VERSION = 1
FILE_STRUCTURE_VERSION = 1

# Everything in the PVD up to and including the byte after the file
# structure version; the rest is application use and reserved space.
PVD_USED_LENGTH = 883


class PrimaryVolumeDescriptor(object):
    '''
    A class representing the Primary Volume Descriptor of the image.  This is
    the first thing a reader looks at, and contains the basic geometry of the
    volume.
    '''
    __slots__ = ('_initialized', 'system_identifier', 'volume_identifier',
                 'space_size', 'set_size', 'seqnum', 'log_block_size',
                 'path_tbl_size', 'path_table_location_le',
                 'path_table_location_be', 'root_dir_record',
                 'volume_set_identifier', 'publisher_identifier',
                 'preparer_identifier', 'application_identifier',
                 'copyright_file_identifier', 'abstract_file_identifier',
                 'bibliographic_file_identifier', 'creation_time')

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def new(self, space_size, layout_obj, vol_ident=b'', sys_ident=b'',
            tm=None):
        # type: (int, layout.Layout, bytes, bytes, Optional[float]) -> None
        '''
        Create a new Primary Volume Descriptor.

        Parameters:
         space_size - The total number of sectors in the volume.
         layout_obj - The Layout describing where everything lives.
         vol_ident - The volume identifier; truncated to 32 bytes.
         sys_ident - The system identifier; truncated to 32 bytes.
         tm - The creation time in seconds since the epoch, or None for now.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise isowrapexception.IsoWrapInternalError('This Primary Volume Descriptor is already initialized')

        if tm is None:
            tm = time.time()

        self.system_identifier = sys_ident
        self.volume_identifier = vol_ident
        self.space_size = space_size
        self.set_size = 1
        self.seqnum = 1
        self.log_block_size = layout_obj.sector_size
        self.path_tbl_size = layout_obj.path_table_size
        self.path_table_location_le = layout_obj.ptr_le_sector
        self.path_table_location_be = layout_obj.ptr_be_sector

        # The root directory is a single sector.
        self.root_dir_record = dr.DirectoryRecord()
        self.root_dir_record.new_root(layout_obj.root_dir_sector,
                                      layout_obj.sector_size, tm)

        self.volume_set_identifier = b''
        self.publisher_identifier = b''
        self.preparer_identifier = b''
        self.application_identifier = b''
        self.copyright_file_identifier = b''
        self.abstract_file_identifier = b''
        self.bibliographic_file_identifier = b''

        self.creation_time = tm

        self._initialized = True

    def write(self, sector):
        # type: (sectorwriter.Sector) -> None
        '''
        Write this Primary Volume Descriptor as the whole contents of a sector.

        Parameters:
         sector - The Sector object to write into.
        Returns:
         Nothing.
        '''
        if not self._initialized:
            raise isowrapexception.IsoWrapInternalError('This Primary Volume Descriptor is not yet initialized')

        sector.write_byte(VOLUME_DESCRIPTOR_TYPE_PRIMARY)
        sector.write_string(STANDARD_IDENTIFIER)
        sector.write_byte(VOLUME_DESCRIPTOR_VERSION)
        sector.write_zeros(1)

        sector.write_padded_string(self.system_identifier, 32)
        sector.write_padded_string(self.volume_identifier, 32)

        sector.write_zeros(8)
        sector.write_both_endian_dword(self.space_size)
        sector.write_zeros(32)  # escape sequences, unused in a PVD

        sector.write_both_endian_word(self.set_size)
        sector.write_both_endian_word(self.seqnum)
        sector.write_both_endian_word(self.log_block_size)
        sector.write_both_endian_dword(self.path_tbl_size)

        sector.write_little_endian_dword(self.path_table_location_le)
        sector.write_little_endian_dword(0)  # no optional L path table
        sector.write_big_endian_dword(self.path_table_location_be)
        sector.write_big_endian_dword(0)  # no optional M path table

        self.root_dir_record.write(sector)

        sector.write_padded_string(self.volume_set_identifier, 128)
        sector.write_padded_string(self.publisher_identifier, 128)
        sector.write_padded_string(self.preparer_identifier, 128)
        sector.write_padded_string(self.application_identifier, 128)

        sector.write_padded_string(self.copyright_file_identifier, 37)
        sector.write_padded_string(self.abstract_file_identifier, 37)
        sector.write_padded_string(self.bibliographic_file_identifier, 37)

        sector.write_date_time(self.creation_time)  # creation
        sector.write_date_time(self.creation_time)  # modification
        sector.write_unspecified_date_time()  # expiration
        sector.write_unspecified_date_time()  # effective

        sector.write_byte(FILE_STRUCTURE_VERSION)
        sector.write_zeros(1)

        if sector.tell() != PVD_USED_LENGTH:
            raise isowrapexception.IsoWrapInternalError('Primary Volume Descriptor is %d bytes, expected %d' % (sector.tell(), PVD_USED_LENGTH))

        # 512 bytes of application use and 653 reserved.
        sector.pad_with_zeros()


class VolumeDescriptorSetTerminator(object):
    '''
    A class that represents a Volume Descriptor Set Terminator.  The VDST
    signals the end of volume descriptors on the image.
    '''
    __slots__ = ('_initialized',)

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def new(self):
        # type: () -> None
        '''
        A method to create a new Volume Descriptor Set Terminator.

        Parameters:
         None.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise isowrapexception.IsoWrapInternalError('Volume Descriptor Set Terminator already initialized')

        self._initialized = True

    def write(self, sector):
        # type: (sectorwriter.Sector) -> None
        '''
        A method to write this Volume Descriptor Set Terminator as the whole
        contents of a sector.

        Parameters:
         sector - The Sector object to write into.
        Returns:
         Nothing.
        '''
        if not self._initialized:
            raise isowrapexception.IsoWrapInternalError('Volume Descriptor Set Terminator not yet initialized')

        sector.write_byte(VOLUME_DESCRIPTOR_TYPE_SET_TERMINATOR)
        sector.write_string(STANDARD_IDENTIFIER)
        sector.write_byte(VOLUME_DESCRIPTOR_VERSION)
        sector.pad_with_zeros()


def pvd_factory(space_size, layout_obj, vol_ident=b'', sys_ident=b'', tm=None):
    # type: (int, layout.Layout, bytes, bytes, Optional[float]) -> PrimaryVolumeDescriptor
    '''
    An internal function to create a Primary Volume Descriptor.

    Parameters:
     space_size - The total number of sectors in the volume.
     layout_obj - The Layout describing where everything lives.
     vol_ident - The volume identifier.
     sys_ident - The system identifier.
     tm - The creation time in seconds since the epoch, or None for now.
    Returns:
     The newly created Primary Volume Descriptor.
    '''
    pvd = PrimaryVolumeDescriptor()
    pvd.new(space_size, layout_obj, vol_ident, sys_ident, tm)
    return pvd


def vdst_factory():
    # type: () -> VolumeDescriptorSetTerminator
    '''
    An internal function to create a new Volume Descriptor Set Terminator.

    Parameters:
     None.
    Returns:
     The newly created Volume Descriptor Set Terminator.
    '''
    vdst = VolumeDescriptorSetTerminator()
    vdst.new()
    return vdst
