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

import isowrap.dr
import isowrap.layout
import isowrap.sectorwriter
import isowrap.isowrapexception

def record_bytes(*recs):
    out = BytesIO()
    writer = isowrap.sectorwriter.SectorWriter(out, isowrap.layout.layout_factory())
    sector = writer.next_sector()
    for rec in recs:
        rec.write(sector)
    used = sector.tell()
    writer.finish()
    return out.getvalue()[:used]

def unpack_dr(data):
    return struct.unpack_from('<BBLLLL7sBBBHHB', data, 0)

def test_dr_write_not_initialized():
    rec = isowrap.dr.DirectoryRecord()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        record_bytes(rec)
    assert(str(excinfo.value) == 'Directory Record not initialized')

def test_dr_new_twice():
    rec = isowrap.dr.DirectoryRecord()
    rec.new_dot(20, 2048)
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        rec.new_dot(20, 2048)
    assert(str(excinfo.value) == 'Directory Record already initialized')

def test_dr_root():
    rec = isowrap.dr.DirectoryRecord()
    rec.new_root(20, 2048)
    data = record_bytes(rec)
    assert(len(data) == 34)
    (dr_len, xattr_len, extent_le, extent_be, len_le, len_be, date, flags,
     unit_size, gap, seq_le, seq_be, len_fi) = unpack_dr(data)
    assert(dr_len == 34)
    assert(xattr_len == 0)
    assert(extent_le == 20)
    assert(struct.unpack_from('>L', data, 6)[0] == 20)
    assert(len_le == 2048)
    assert(struct.unpack_from('>L', data, 14)[0] == 2048)
    assert(flags == 2)
    assert(unit_size == 0)
    assert(gap == 0)
    assert(seq_le == 1)
    assert(struct.unpack_from('>H', data, 30)[0] == 1)
    assert(len_fi == 1)
    assert(data[33:34] == b'\x00')

def test_dr_dotdot():
    data = record_bytes(isowrap.dr.dotdot_factory(20, 2048))
    assert(len(data) == 34)
    assert(data[25] == 2)
    assert(data[33:34] == b'\x01')

def test_dr_file_odd_name():
    data = record_bytes(isowrap.dr.file_factory(b'FOO', 21, 5000))
    # 33 + 3 is even, so no padding.
    assert(len(data) == 36)
    assert(data[0] == 36)
    assert(data[33:] == b'FOO')
    (dr_len, xattr_len, extent_le, extent_be, len_le, len_be, date, flags,
     unit_size, gap, seq_le, seq_be, len_fi) = unpack_dr(data)
    assert(flags == 0)
    assert(extent_le == 21)
    assert(struct.unpack_from('>L', data, 6)[0] == 21)
    assert(len_le == 5000)
    assert(struct.unpack_from('>L', data, 14)[0] == 5000)

def test_dr_file_even_name():
    data = record_bytes(isowrap.dr.file_factory(b'FOOB', 21, 1))
    # 33 + 4 is odd, so one byte of padding.
    assert(len(data) == 38)
    assert(data[0] == 38)
    assert(data[33:] == b'FOOB\x00')

def test_dr_file_no_name():
    rec = isowrap.dr.DirectoryRecord()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInvalidInput) as excinfo:
        rec.new_file(b'', 21, 0)
    assert(str(excinfo.value) == 'A file must have a name')

def test_dr_file_too_large():
    rec = isowrap.dr.DirectoryRecord()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInvalidInput) as excinfo:
        rec.new_file(b'FOO', 21, 2**32)
    assert(str(excinfo.value) == 'Maximum supported file length is 2^32-1')

def test_dr_date():
    import time
    tm = 1000000000.0
    rec = isowrap.dr.file_factory(b'FOO', 21, 1, tm)
    assert(record_bytes(rec)[18:25] == rec.date.record())
    assert(rec.date.years_since_1900 == time.localtime(tm).tm_year - 1900)

def test_dr_root_directory_entries():
    data = record_bytes(isowrap.dr.dot_factory(20, 2048),
                        isowrap.dr.dotdot_factory(20, 2048),
                        isowrap.dr.file_factory(b'FOO', 21, 1))
    assert(len(data) == 34 + 34 + 36)
    assert(data[34] == 34)
    assert(data[68] == 36)
