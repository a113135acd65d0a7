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

"""Contains the exceptions raised by IsoWrap."""


class IsoWrapException(Exception):
    """The custom Exception class for IsoWrap."""
    def __init__(self, msg):
        # type: (str) -> None
        Exception.__init__(self, msg)


class IsoWrapUsageError(IsoWrapException):
    """
    The IsoWrap exception raised when the tool was invoked incorrectly, for
    instance with a missing input file.  Nothing has been written yet.
    """


class IsoWrapIOError(IsoWrapException):
    """
    The IsoWrap exception raised when opening, reading, or writing one of the
    files failed.  A partially written output file may be left behind.
    """


class IsoWrapInvalidInput(IsoWrapException):
    """
    The IsoWrap exception raised when the input cannot be represented on an
    ISO9660 image, for instance because of a disallowed file name.
    """


class IsoWrapInternalError(IsoWrapException):
    """
    The IsoWrap exception raised when the sector layout computed up front
    does not match what was actually written.  This is always a bug.
    """
