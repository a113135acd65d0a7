import pytest
import os
import sys
from io import BytesIO
import struct

prefix = '.'
for i in range(0, 3):
    if os.path.isdir(os.path.join(prefix, 'isowrap')):
        sys.path.insert(0, prefix)
        break
    else:
        prefix = '../' + prefix

import isowrap.layout
import isowrap.isowrapexception

def test_layout_fixed_positions():
    layout = isowrap.layout.layout_factory()
    assert(layout.sector_size == 2048)
    assert(layout.system_area_sectors == 16)
    assert(layout.pvd_sector == 16)
    assert(layout.terminator_sector == 17)
    assert(layout.ptr_le_sector == 18)
    assert(layout.ptr_be_sector == 19)
    assert(layout.root_dir_sector == 20)
    assert(layout.first_data_sector == 21)
    assert(layout.fixed_header_sectors == 21)
    assert(layout.path_table_size == 2048)

def test_layout_bad_sector_size():
    with pytest.raises(isowrap.isowrapexception.IsoWrapInvalidInput) as excinfo:
        isowrap.layout.Layout(sector_size=512)
    assert(str(excinfo.value) == 'Only a sector size of 2048 is supported')

def test_layout_bad_system_area():
    with pytest.raises(isowrap.isowrapexception.IsoWrapInvalidInput) as excinfo:
        isowrap.layout.Layout(system_area_sectors=0)
    assert(str(excinfo.value) == 'The system area must be 16 sectors')

@pytest.mark.parametrize('size,expected', [
    (0, 22),
    (1, 22),
    (2047, 22),
    (2048, 22),
    (2049, 23),
    (4096, 23),
    (5000, 24),
    (2**32 - 1, 21 + 2**21),
])
def test_layout_total_sectors(size, expected):
    layout = isowrap.layout.layout_factory()
    assert(layout.total_sectors(size) == expected)
    assert(layout.last_sector(size) == expected - 1)
    assert(layout.image_size(size) == expected * 2048)

def test_layout_data_sectors_empty():
    layout = isowrap.layout.layout_factory()
    assert(layout.data_sectors(0) == 1)

def test_layout_data_sectors_negative():
    layout = isowrap.layout.layout_factory()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        layout.data_sectors(-1)
    assert(str(excinfo.value) == 'Negative file size -1')
