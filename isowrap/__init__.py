"""
IsoWrap is a pure python library to wrap a single file into a minimal
ISO9660 image, suitable for writing to a CD or attaching to a virtual machine.
"""
from .isowrap import IsoWrap  # NOQA
