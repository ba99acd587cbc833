import pytest

from fuzzyindex.config import ParseConfig
from fuzzyindex.postings.buffer import BufferExhausted
from fuzzyindex.postings.context import ParseContext
from fuzzyindex.postings.drivers import parse_delim, parse_pair, parse_query, parse_with_config, parse_word
from fuzzyindex.postings.emitters import DelimitedEmitter
from fuzzyindex.tokenization.table import Entry
from fuzzyindex.postings.records import Fixed, Length, PostingRecord, RecordCollector, decode_group

C1 = b"\xa4\xa4"
C2 = b"\xa4\xe5"
C3 = b"\xa6\x72"
C4 = b"\xa5\x40"
DELIM = b"\x00\x00\x00\x01"


def _collect(fn, *args, **kwargs):
    collector = RecordCollector()
    calls = fn(*args, collector, **kwargs)
    assert calls == len(collector)
    return collector.records


def test_pair_records():
    records = _collect(parse_pair, b"hello " + C1 + C2)
    assert records == [
        PostingRecord(b"hello", b"  ", 1),
        PostingRecord(C1, C2, 1),
        PostingRecord(C2, b"!!", 1),
    ]


def test_word_records_use_value_spec():
    records = _collect(parse_word, b"hello " + C1 + C2)
    assert records == [
        PostingRecord(b"hello  ", Length(7), 1),
        PostingRecord(C1 + C2, Fixed(4), 1),
        PostingRecord(C2 + b"!!", Fixed(4), 1),
    ]


def test_frequency_saturates_in_every_strategy():
    data = b"ab " * 1000
    assert _collect(parse_pair, data)[0].length == 163
    assert _collect(parse_word, data)[0].length == 163
    value = _collect(parse_delim, data, DELIM)[0].value
    assert value[-1] == 163


def test_delim_groups_same_prefix_into_one_record():
    records = _collect(parse_delim, C1 + C2 + b" " + C1 + C3, DELIM)
    first = records[0]
    assert first.key == C1
    assert first.value == DELIM + C2 + b"\x01" + C3 + b"\x01"
    assert first.length == len(first.value) == 10
    assert [r.key for r in records] == [C1, C2, C3]


def test_delim_ascii_record():
    records = _collect(parse_delim, b"Hi hi HI", DELIM)
    assert records == [PostingRecord(b"hi", DELIM + b"  \x03", 7)]


def test_delim_query_mode_suppresses_trailing_unigram():
    doc = _collect(parse_delim, C1 + C2 + C3, DELIM)
    query = _collect(parse_delim, C1 + C2 + C3, DELIM, query=True)
    assert [r.key for r in doc] == [C1, C2, C3]
    assert [r.key for r in query] == [C1, C2]


def test_parse_query_uses_blank_delimiter():
    records = _collect(parse_query, C1 + C2)
    assert records == [PostingRecord(C1, b"    " + C2 + b"\x01", 7)]


def test_decode_group_round_trips_delimited_value():
    records = _collect(parse_delim, C1 + C2 + b" " + C1 + C3 + b" " + C1 + C2, DELIM)
    delimiter, items = decode_group(records[0].value)
    assert delimiter == DELIM
    assert items == [(C2, 2), (C3, 1)]


def test_decode_group_rejects_bad_length():
    with pytest.raises(ValueError):
        decode_group(DELIM + b"\xa4")


def test_buffer_exhausted_aborts_call():
    config = ParseConfig(max_value_bytes=10)
    data = b" ".join([C1 + C2, C1 + C3, C1 + C4])
    collector = RecordCollector()
    with pytest.raises(BufferExhausted) as excinfo:
        parse_delim(data, DELIM, collector, config=config)
    assert excinfo.value.limit == 10
    assert excinfo.value.requested == 13
    # Nothing leaks into the next call.
    again = _collect(parse_delim, C1 + C2, DELIM, config=config)
    assert again[0] == PostingRecord(C1, DELIM + C2 + b"\x01", 7)


def test_delimiter_must_be_four_bytes():
    with pytest.raises(ValueError):
        parse_delim(b"hello", b"abc", RecordCollector())


@pytest.mark.parametrize("strategy", ["pair", "word", "delim", "query"])
def test_repeated_calls_are_identical(strategy):
    data = b"Mixed TEXT " + C1 + C2 + C3 + b" text " + C1 + C4
    runners = {
        "pair": lambda cb: parse_pair(data, cb),
        "word": lambda cb: parse_word(data, cb),
        "delim": lambda cb: parse_delim(data, DELIM, cb),
        "query": lambda cb: parse_query(data, cb),
    }
    first, second = RecordCollector(), RecordCollector()
    runners[strategy](first)
    runners[strategy](second)
    assert first.records == second.records
    assert first.records


def test_cjk_frequency_saturates():
    data = (C1 + C2 + b" ") * 1000
    pair = _collect(parse_pair, data)
    assert pair[0] == PostingRecord(C1, C2, 163)
    grouped = _collect(parse_delim, data, DELIM)
    _, items = decode_group(grouped[0].value)
    assert items == [(C2, 163)]


def test_delim_falls_back_to_config():
    config = ParseConfig(delimiter=DELIM, query=True)
    records = _collect(parse_delim, C1 + C2, None, config=config)
    assert records == [PostingRecord(C1, DELIM + C2 + b"\x01", 7)]


def test_delim_explicit_arguments_override_config():
    config = ParseConfig(delimiter=DELIM, query=True)
    records = _collect(parse_delim, C1 + C2, b"abcd", query=False, config=config)
    assert [r.key for r in records] == [C1, C2]
    assert all(r.value.startswith(b"abcd") for r in records)


@pytest.mark.parametrize("strategy,runner", [("pair", parse_pair), ("word", parse_word)])
def test_pair_and_word_ignore_parse_config(strategy, runner):
    data = C1 + C2 + b" hello"
    config = ParseConfig(delimiter=DELIM, query=True, max_value_bytes=5)
    expected, got = RecordCollector(), RecordCollector()
    runner(data, expected)
    parse_with_config(data, strategy, got, config)
    assert got.records == expected.records
    assert any(r.key.startswith(C2) for r in got.records)


def test_overflow_leaves_no_partial_group_item():
    context = ParseContext.create(delimiter=DELIM, max_value_bytes=9)
    emitter = DelimitedEmitter(context, RecordCollector())
    emitter.visit(Entry(C1 + C2))
    with pytest.raises(BufferExhausted):
        emitter.visit(Entry(C1 + C3))
    assert context.buffer.getvalue() == DELIM + C2 + b"\x01"
