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

import isowrap.dates
import isowrap.isowrapexception

def test_dirrecorddate_record_not_initialized():
    drdate = isowrap.dates.DirectoryRecordDate()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        drdate.record()
    assert(str(excinfo.value) == 'Directory Record Date not initialized')

def test_dirrecorddate_new_after_new():
    drdate = isowrap.dates.DirectoryRecordDate()
    drdate.new(time.time())
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        drdate.new(time.time())
    assert(str(excinfo.value) == 'Directory Record Date already initialized')

def test_dirrecorddate_new_current_time():
    drdate = isowrap.dates.DirectoryRecordDate()
    drdate.new()
    assert(drdate.years_since_1900 >= 100)

def test_dirrecorddate_record():
    tm = 1000000000.0
    local = time.localtime(tm)
    drdate = isowrap.dates.DirectoryRecordDate()
    drdate.new(tm)
    rec = drdate.record()
    assert(len(rec) == 7)
    assert(struct.unpack('=BBBBBB', rec[:6]) == (local.tm_year - 1900, local.tm_mon, local.tm_mday, local.tm_hour, local.tm_min, local.tm_sec))

def test_voldate_record_not_initialized():
    voldate = isowrap.dates.VolumeDescriptorDate()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        voldate.record()
    assert(str(excinfo.value) == 'This Volume Descriptor Date is not initialized')

def test_voldate_new_after_new():
    voldate = isowrap.dates.VolumeDescriptorDate()
    voldate.new()
    with pytest.raises(isowrap.isowrapexception.IsoWrapInternalError) as excinfo:
        voldate.new()
    assert(str(excinfo.value) == 'This Volume Descriptor Date object is already initialized')

def test_voldate_new_unspecified():
    voldate = isowrap.dates.VolumeDescriptorDate()
    voldate.new()
    assert(voldate.record() == b'0000000000000000\x00')

def test_voldate_new():
    tm = 1000000000.25
    local = time.localtime(tm)
    voldate = isowrap.dates.VolumeDescriptorDate()
    voldate.new(tm)
    rec = voldate.record()
    assert(len(rec) == 17)
    assert(rec[:14] == time.strftime('%Y%m%d%H%M%S', local).encode('utf-8'))
    assert(rec[14:16] == b'25')
    assert(voldate.year == local.tm_year)
