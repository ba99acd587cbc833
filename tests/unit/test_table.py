import pytest

from fuzzyindex.tokenization.table import SortedFrequencyTable


def test_find_or_insert_then_increment():
    table = SortedFrequencyTable()
    entry, created = table.find_or_insert(b"ab")
    assert created and entry.count == 1
    same, created = table.find_or_insert(b"ab")
    assert same is entry and not created
    table.increment(same)
    assert table.get(b"ab") == 2


def test_traversal_is_byte_ordered():
    table = SortedFrequencyTable()
    for token in [b"\xa4\xe5!!", b"zz", b"\xa4\xa4\xa4\xe5", b"ab", b"abc"]:
        table.add(token)
    seen = []
    table.for_each_in_order(lambda entry: seen.append(entry.token))
    assert seen == [b"ab", b"abc", b"zz", b"\xa4\xa4\xa4\xe5", b"\xa4\xe5!!"]


def test_rejects_empty_and_oversized_tokens():
    table = SortedFrequencyTable()
    with pytest.raises(ValueError):
        table.add(b"")
    with pytest.raises(ValueError):
        table.add(b"x" * 33)


def test_destroy_all_empties_table():
    table = SortedFrequencyTable()
    table.add(b"ab")
    table.destroy_all()
    assert len(table) == 0
    assert b"ab" not in table
