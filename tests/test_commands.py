import pytest

from rasterprint.errors import InvalidInput
from rasterprint.protocol import MonoBitmap, append_trailer, build_job, cut_cmd, feed_cmd, initialize_cmd, raster_cmd
from rasterprint.protocol.commands import raster_header


def test_fixed_commands():
    assert initialize_cmd() == b"\x1b\x40"
    assert cut_cmd() == b"\x1d\x56\x42\x00"
    assert feed_cmd(4) == b"\x1b\x64\x04"
    assert feed_cmd(0) == b"\x1b\x64\x00"
    assert feed_cmd(255) == b"\x1b\x64\xff"


@pytest.mark.parametrize("lines", [-1, 256, 3.5])
def test_feed_rejects_out_of_range(lines):
    with pytest.raises(InvalidInput) as info:
        feed_cmd(lines)
    assert info.value.field == "feed_lines"


def test_raster_header_is_little_endian():
    assert raster_header(48, 300) == b"\x1d\x76\x30\x00" + bytes([48, 0, 0x2C, 0x01])


def test_raster_header_rejects_oversized_height():
    with pytest.raises(InvalidInput):
        raster_header(2, 0x10000)


def test_raster_cmd_embeds_bitmap():
    bitmap = MonoBitmap(16, 2, bytes([0x80, 0x01, 0xFF, 0x00]))
    assert raster_cmd(bitmap) == b"\x1d\x76\x30\x00\x02\x00\x02\x00" + bytes([0x80, 0x01, 0xFF, 0x00])


def test_build_job_order():
    bitmap = MonoBitmap(8, 1, b"\xaa")
    job = build_job(bitmap, initialize=True, feed_lines=3, cut=True)
    assert job == b"\x1b\x40" + b"\x1d\x76\x30\x00\x01\x00\x01\x00\xaa" + b"\x1b\x64\x03" + b"\x1d\x56\x42\x00"


def test_build_job_defaults_feed_four_lines_without_reset():
    job = build_job(MonoBitmap(8, 1, b"\x00"))
    assert job.startswith(b"\x1d\x76\x30\x00")
    assert job.endswith(b"\x1b\x64\x04")


def test_append_trailer_without_feed():
    assert append_trailer(b"abc", feed_lines=0) == b"abc"
    assert append_trailer(b"abc", feed_lines=None, cut=True) == b"abc" + cut_cmd()
