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
Class to support ISO9660 Path Table Records.
'''

from isowrap import isowrapexception

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    # NOTE: these imports have to be here to avoid circular deps
    from isowrap import sectorwriter  # NOQA pylint: disable=unused-import


class PathTableRecord(object):
    '''
    A class that represents a single ISO9660 Path Table Record.  Only the
    root directory is ever described, so a path table is always exactly one
    of these followed by zeros.
    '''
    __slots__ = ('_initialized', 'len_di', 'xattr_length', 'extent_location',
                 'parent_directory_num', 'directory_identifier')

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def new_root(self, extent):
        # type: (int) -> None
        '''
        A method to create a new root Path Table Record.

        Parameters:
         extent - The sector holding the root directory.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise isowrapexception.IsoWrapInternalError('Path Table Record already initialized')

        self.directory_identifier = b'\x00'
        self.len_di = len(self.directory_identifier)
        self.xattr_length = 0
        self.extent_location = extent
        # The root is its own parent, and directory numbers start at 1.
        self.parent_directory_num = 1
        self._initialized = True

    def write(self, sector, byteorder):
        # type: (sectorwriter.Sector, str) -> None
        '''
        A method to write this Path Table Record as the whole contents of a
        sector.

        Parameters:
         sector - The Sector object to write into.
         byteorder - Either 'little' or 'big', for the L and M Path Tables.
        Returns:
         Nothing.
        '''
        if not self._initialized:
            raise isowrapexception.IsoWrapInternalError('Path Table Record not initialized')

        sector.write_byte(self.len_di)
        sector.write_byte(self.xattr_length)
        sector.write_dword(self.extent_location, byteorder)
        sector.write_word(self.parent_directory_num, byteorder)
        sector.write(self.directory_identifier)
        sector.write_zeros(self.len_di % 2)
        sector.pad_with_zeros()


def root_ptr_factory(extent):
    # type: (int) -> PathTableRecord
    '''
    An internal function to create the root Path Table Record.

    Parameters:
     extent - The sector holding the root directory.
    Returns:
     The new Path Table Record.
    '''
    ptr = PathTableRecord()
    ptr.new_root(extent)
    return ptr
