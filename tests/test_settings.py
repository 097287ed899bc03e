import argparse

import pytest

from cachesim.errors import ConfigurationError
from cachesim.policy import Policy
from cachesim.settings import CacheConfig, Settings


def make_args(**kw):
    values = dict(cachefile=None, sbits=None, perset=None, bbits=None,
                  policy=None, verbose=False, trace='t.trace')
    values.update(kw)
    return argparse.Namespace(**values)


def test_derived_values():
    c = CacheConfig(4, 2, 6, 'LFU')
    assert c.num_sets == 16
    assert c.tag_bits == 54
    assert c.block_size == 64
    assert c.total_lines == 32
    assert c.policy is Policy.LFU


def test_config_is_immutable():
    c = CacheConfig(1, 1, 1)
    with pytest.raises(AttributeError):
        c.set_bits = 3


@pytest.mark.parametrize('s,E,b', [
    (0, 0, 4),   # no lines
    (4, -1, 4),
    (-1, 1, 4),
    (4, 1, -2),
    (40, 1, 25), # 65 bits
])
def test_invalid_geometry(s, E, b):
    with pytest.raises(ConfigurationError):
        CacheConfig(s, E, b)


def test_non_integer_geometry():
    with pytest.raises(ConfigurationError):
        CacheConfig('four', 1, 4)


def test_edge_geometry_is_valid():
    assert CacheConfig(32, 1, 32).tag_bits == 0
    assert CacheConfig(0, 1, 0).num_sets == 1


def test_from_file(tmp_path, capsys):
    conf = tmp_path / 'my.conf'
    conf.write_text('# a cache\n'
                    'set_index_bits    : 5   # comment\n'
                    'lines_per_set     : 4\n'
                    'block_offset_bits : nope\n'
                    'colour            : 3\n'
                    'just garbage\n'
                    'policy            : lfu\n')
    c = CacheConfig.from_file(str(conf))
    assert c == CacheConfig(5, 4, Settings.bbits, Policy.LFU)
    err = capsys.readouterr().err
    assert 'Ignoring invalid value' in err
    assert 'Ignoring invalid property' in err
    assert 'Ignoring invalid line' in err


def test_from_file_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        CacheConfig.from_file(str(tmp_path / 'missing.conf'))


def test_from_file_invalid_result(tmp_path):
    conf = tmp_path / 'bad.conf'
    conf.write_text('lines_per_set : 0\n')
    with pytest.raises(ConfigurationError):
        CacheConfig.from_file(str(conf))


def test_config_from_args_defaults():
    c = Settings.config_from_args(make_args())
    assert c == CacheConfig(8, 1, 8, Policy.LRU)


def test_flags_override_file(tmp_path):
    conf = tmp_path / 'c.conf'
    conf.write_text('set_index_bits: 2\nlines_per_set: 8\npolicy: 1\n')
    args = make_args(cachefile=str(conf), perset=2, bbits=3)
    c = Settings.config_from_args(args)
    assert c == CacheConfig(2, 2, 3, Policy.LFU)


def test_to_dict():
    assert CacheConfig(1, 2, 3, 'LFU').to_dict() == {
        'set_index_bits': 1,
        'lines_per_set': 2,
        'block_offset_bits': 3,
        'policy': 'LFU',
        'arch_size_bits': 64,
    }
