import io

import pytest

from rutkit.mem import AutoMem


def test_new_buffer_has_size():
    mem = AutoMem(4)
    assert len(mem) == 4
    assert bytes(mem) == b"\x00" * 4


def test_join_concatenates_parts():
    mem = AutoMem.join([b"ab", AutoMem.join([b"cd"]), b""])
    assert bytes(mem) == b"abcd"
    assert list(mem) == list(b"abcd")


def test_append_returns_self_and_grows():
    mem = AutoMem.join([b"abc"])
    result = mem.append(b"def")
    assert result is mem
    assert mem == b"abcdef"


def test_add_leaves_operands_unchanged():
    left = AutoMem.join([b"ab"])
    right = AutoMem.join([b"cd"])
    combined = left + right
    assert combined == b"abcd"
    assert left == b"ab"
    assert right == b"cd"


def test_iadd_appends():
    mem = AutoMem.join([b"x"])
    mem += b"yz"
    assert mem == b"xyz"


def test_getitem_index_and_slice():
    mem = AutoMem.join([b"hello"])
    assert mem[1] == ord("e")
    assert mem[-1] == ord("o")
    assert mem[1:3] == b"el"
    with pytest.raises(IndexError):
        mem[5]


def test_resize_keep_preserves_prefix():
    mem = AutoMem.join([b"abc"])
    mem.resize(6, keep=True)
    assert mem[:3] == b"abc"
    assert len(mem) == 6


def test_shrink_then_regrow_within_capacity_keeps_data():
    mem = AutoMem.join([b"abcdef"])
    mem.resize(2)
    assert mem == b"ab"
    mem.resize(6)
    assert mem == b"abcdef"


def test_negative_size_raises():
    with pytest.raises(ValueError):
        AutoMem(-1)


def test_save_and_load_round_trip(tmp_path):
    target = tmp_path / "sub" / "mem.bin"
    AutoMem.join([b"payload"]).save_data(target)
    assert target.read_bytes() == b"payload"
    assert AutoMem.from_file(target) == b"payload"
    assert AutoMem.from_file(target, 3) == b"pay"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        AutoMem.from_file(tmp_path / "missing.bin")


def test_read_data_with_size_and_pos():
    stream = io.BytesIO(b"0123456789")
    mem = AutoMem()
    mem.read_data(stream, size=4, pos=3)
    assert mem == b"3456"


def test_read_data_uses_current_size():
    stream = io.BytesIO(b"abcdef")
    mem = AutoMem(2)
    mem.read_data(stream)
    assert mem == b"ab"


def test_write_data_at_position():
    stream = io.BytesIO(b"..........")
    AutoMem.join([b"XY"]).write_data(stream, pos=4)
    assert stream.getvalue() == b"....XY...."