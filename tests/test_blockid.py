import pytest

from blockdb.blockid import BlockId


@pytest.mark.parametrize(
    ("block1", "block2", "expected"),
    [
        (BlockId("test.db", 1), BlockId("test.db", 1), True),
        (BlockId("test.db", 1), BlockId("test.db", 2), False),
        (BlockId("test.db", 1), BlockId("another.db", 1), False),
    ],
    ids=["same file and block", "different block number", "different file name"],
)
def test_equality(block1, block2, expected):
    assert (block1 == block2) is expected


def test_string_representation():
    assert str(BlockId("test.db", 1)) == "[file test.db, block 1]"


def test_hash_code_consistency():
    b1 = BlockId("test.db", 1)
    b2 = BlockId("test.db", 1)
    b3 = BlockId("test.db", 2)
    assert b1.hash_code() == b2.hash_code()
    assert b1.hash_code() != b3.hash_code()


def test_hash_code_fits_in_32_bits():
    long_name = "x" * 500
    value = BlockId(long_name, 123456).hash_code()
    assert 0 <= value <= 0xFFFFFFFF


def test_usable_as_mapping_key():
    table = {BlockId("f", 3): "S"}
    assert table[BlockId("f", 3)] == "S"
    assert BlockId("f", 4) not in table


def test_is_immutable():
    blk = BlockId("f", 1)
    with pytest.raises(AttributeError):
        blk.blknum = 2
    assert str(blk) == "[file f, block 1]"
    assert blk == BlockId("f", 1)