import pytest

from cachesim.errors import TraceFormatError
from cachesim.trace_reader import TraceReader, TraceRecord

YI_TRACE = [
    ' L 10,1',
    ' M 20,1',
    ' L 22,1',
    ' S 18,1',
    ' L 110,1',
    ' L 210,1',
    ' M 12,1',
]


def test_reads_data_records(write_trace):
    path = write_trace(YI_TRACE)
    records = list(TraceReader(path))
    assert len(records) == 7
    assert records[0] == TraceRecord('L', 0x10, 1)
    assert records[1] == TraceRecord('M', 0x20, 1)
    assert records[4].address == 0x110


def test_skips_instructions_banners_and_blank_lines(write_trace):
    path = write_trace([
        '==12345== Lackey, an example Valgrind tool',
        'I  0400d7d4,8',
        ' L 7ff0005b8,8',
        '',
        'I  0400d7d8,3',
        ' S 7ff0005b0,8',
        '   ',
    ])
    records = list(TraceReader(path))
    assert [r.kind for r in records] == ['L', 'S']
    assert records[0].address == 0x7ff0005b8
    assert records[0].size == 8


def test_indented_instruction_is_skipped(write_trace):
    path = write_trace([' I 400,4', ' L 10,4'])
    assert [r.kind for r in TraceReader(path)] == ['L']


def test_can_iterate_twice(write_trace):
    reader = TraceReader(write_trace(YI_TRACE))
    assert list(reader) == list(reader)


def test_full_width_address(write_trace):
    path = write_trace([' L ffffffffffffffff,8'])
    (record,) = list(TraceReader(path))
    assert record.address == (1 << 64) - 1


@pytest.mark.parametrize('line', [
    ' L 10',              # missing size
    ' L zz,1',            # not hex
    ' L 10,x',            # bad size
    ' X 10,1',            # unknown kind
    ' L 1ffffffffffffffff,1', # wider than 64 bits
    ' L',
])
def test_malformed_records(write_trace, line):
    path = write_trace([' L 0,1', line])
    reader = TraceReader(path)
    with pytest.raises(TraceFormatError) as excinfo:
        list(reader)
    assert 'line 2' in str(excinfo.value)
    reader.close()


def test_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        TraceReader(str(tmp_path / 'nope.trace'))
    assert excinfo.value.code == 1
    assert 'nope.trace' in capsys.readouterr().err


def test_context_manager_closes_file(write_trace):
    with TraceReader(write_trace(YI_TRACE)) as reader:
        next(iter(reader))
    assert reader.file.closed
