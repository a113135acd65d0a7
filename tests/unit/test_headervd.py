import pytest
import os
import sys
from io import BytesIO
import struct
import time

prefix = '.'
for i in range(0, 3):
    if os.path.isdir(os.path.join(prefix, 'isowrap')):
        sys.path.insert(0, prefix)
        break
    else:
        prefix = '../' + prefix

import isowrap.headervd
import isowrap.layout
import isowrap.sectorwriter
import isowrap.isowrapexception

PVD_FMT = '<B5sBB32s32sQLL32sHHHHHHLLLLLL34s128s128s128s128s37s37s37s17s17s17s17sBB512s653s'

def write_one(obj):
    out = BytesIO()
    writer = isowrap.sectorwriter.SectorWriter(out, isowrap.layout.layout_factory())
    obj.write(writer.next_sector())
    writer.finish()
    return out.getvalue()

def test_pvd_write_not_initialized():
    pvd = isowrap.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        write_one(pvd)
    assert(str(excinfo.value) == 'This Primary Volume Descriptor is not yet initialized')

def test_pvd_new_twice():
    layout = isowrap.layout.layout_factory()
    pvd = isowrap.headervd.pvd_factory(24, layout)
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        pvd.new(24, layout)
    assert(str(excinfo.value) == 'This Primary Volume Descriptor is already initialized')

def test_pvd_fields():
    tm = 1000000000.0
    layout = isowrap.layout.layout_factory()
    pvd = isowrap.headervd.pvd_factory(24, layout, tm=tm)
    data = write_one(pvd)
    assert(len(data) == 2048)

    (vd_type, ident, version, flags, sys_ident, vol_ident, unused1,
     space_le, space_be, escapes, set_le, set_be, seq_le, seq_be, blk_le,
     blk_be, ptbl_le, ptbl_be, ptbl_loc_le, opt_ptbl_loc_le, ptbl_loc_be,
     opt_ptbl_loc_be, root_dr, vol_set_ident, pub_ident, prep_ident,
     app_ident, copyright, abstract, biblio, create_date, mod_date,
     expire_date, effective_date, fs_version, unused2, app_use,
     reserved) = struct.unpack(PVD_FMT, data)

    assert(vd_type == 1)
    assert(ident == b'CD001')
    assert(version == 1)
    assert(flags == 0)
    assert(sys_ident == b'\x00' * 32)
    assert(vol_ident == b'\x00' * 32)
    assert(unused1 == 0)
    assert(space_le == 24)
    assert(space_be == struct.unpack('<L', struct.pack('>L', 24))[0])
    assert(escapes == b'\x00' * 32)
    assert(set_le == 1)
    assert(seq_le == 1)
    assert(blk_le == 2048)
    assert(blk_be == struct.unpack('<H', struct.pack('>H', 2048))[0])
    assert(ptbl_le == 2048)
    assert(ptbl_be == struct.unpack('<L', struct.pack('>L', 2048))[0])
    assert(ptbl_loc_le == 18)
    assert(opt_ptbl_loc_le == 0)
    assert(ptbl_loc_be == struct.unpack('<L', struct.pack('>L', 19))[0])
    assert(opt_ptbl_loc_be == 0)
    assert(root_dr[0] == 34)
    assert(struct.unpack_from('<L', root_dr, 2)[0] == 20)
    assert(struct.unpack_from('<L', root_dr, 10)[0] == 2048)
    assert(vol_set_ident == b'\x00' * 128)
    assert(pub_ident == b'\x00' * 128)
    assert(prep_ident == b'\x00' * 128)
    assert(app_ident == b'\x00' * 128)
    assert(copyright == b'\x00' * 37)
    assert(abstract == b'\x00' * 37)
    assert(biblio == b'\x00' * 37)
    assert(create_date[:14] == time.strftime('%Y%m%d%H%M%S', time.localtime(tm)).encode('utf-8'))
    assert(mod_date == create_date)
    assert(expire_date == b'0' * 16 + b'\x00')
    assert(effective_date == b'0' * 16 + b'\x00')
    assert(fs_version == 1)
    assert(unused2 == 0)
    assert(app_use == b'\x00' * 512)
    assert(reserved == b'\x00' * 653)

def test_pvd_identifiers():
    layout = isowrap.layout.layout_factory()
    pvd = isowrap.headervd.pvd_factory(22, layout, vol_ident=b'CDROM', sys_ident=b'LINUX')
    data = write_one(pvd)
    assert(data[8:40] == b'LINUX' + b'\x00' * 27)
    assert(data[40:72] == b'CDROM' + b'\x00' * 27)

def test_pvd_identifier_truncated():
    layout = isowrap.layout.layout_factory()
    pvd = isowrap.headervd.pvd_factory(22, layout, vol_ident=b'V' * 40)
    data = write_one(pvd)
    assert(data[40:72] == b'V' * 32)
    assert(data[72:80] == b'\x00' * 8)

def test_vdst_write_not_initialized():
    vdst = isowrap.headervd.VolumeDescriptorSetTerminator()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        write_one(vdst)
    assert(str(excinfo.value) == 'Volume Descriptor Set Terminator not yet initialized')

def test_vdst_new_twice():
    vdst = isowrap.headervd.vdst_factory()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        vdst.new()
    assert(str(excinfo.value) == 'Volume Descriptor Set Terminator already initialized')

def test_vdst_write():
    data = write_one(isowrap.headervd.vdst_factory())
    assert(data == b'\xffCD001\x01' + b'\x00' * 2041)
