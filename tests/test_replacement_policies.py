import pytest

from cachesim.cache import Cache, Outcome
from cachesim.errors import ConfigurationError
from cachesim.policy import Policy, VictimCandidates, select
from cachesim.settings import CacheConfig


def fill(cache, lines):
    """set the lines of set 0 to the given (tag, last_used, frequency)"""
    for line,(tag, last_used, freq) in zip(cache.sets[0], lines):
        line.valid = True
        line.tag = tag
        line.last_used = last_used
        line.frequency = freq


def victim_tag(policy, lines, new_tag=99, clock=100):
    """evict from a full set and return the tag that disappeared"""
    c = Cache(CacheConfig(0, len(lines), 0, policy))
    fill(c, lines)
    before = {l.tag for l in c.lines(0)}
    assert c.access(0, new_tag, clock) is Outcome.MISS_EVICTION
    after = {l.tag for l in c.lines(0)}
    (gone,) = before - after
    return gone


def test_select():
    assert select(1, 2, Policy.LRU) == 1
    assert select(1, 2, Policy.LFU) == 2


def test_lru_picks_oldest():
    lines = [(10, 5, 0), (11, 2, 9), (12, 7, 0)]
    assert victim_tag(Policy.LRU, lines) == 11


def test_lfu_picks_least_frequent():
    lines = [(10, 1, 3), (11, 2, 1), (12, 3, 2)]
    assert victim_tag(Policy.LFU, lines) == 11


def test_lfu_tie_broken_by_recency_among_tied_lines():
    # line 10 is the overall LRU but is used more often. Among the two
    # frequency-0 lines, 12 was used longer ago than 11, so 12 goes.
    lines = [(10, 1, 2), (11, 5, 0), (12, 3, 0)]
    assert victim_tag(Policy.LFU, lines) == 12
    assert victim_tag(Policy.LRU, lines) == 10


def test_lfu_full_tie_keeps_first_line():
    lines = [(10, 4, 1), (11, 4, 1)]
    assert victim_tag(Policy.LFU, lines) == 10


def test_candidates_track_independently():
    class L:
        def __init__(self, last_used, frequency):
            self.last_used = last_used
            self.frequency = frequency

    cand = VictimCandidates()
    for i,(u,f) in enumerate([(3, 4), (1, 6), (9, 0), (8, 0)]):
        cand.consider(i, L(u, f))
    assert cand.lru == 1
    assert cand.lfu == 3


def test_lfu_through_accesses():
    # 2-way set: A hit twice, B once installed; C must evict B under LFU
    # even though A is the least recently used.
    c = Cache(CacheConfig(0, 2, 0, Policy.LFU))
    c.access(0, 0xA, 1)
    c.access(0, 0xA, 2)
    c.access(0, 0xA, 3)
    c.access(0, 0xB, 4)
    assert c.access(0, 0xC, 5) is Outcome.MISS_EVICTION
    assert {l.tag for l in c.lines(0)} == {0xA, 0xC}

    c = Cache(CacheConfig(0, 2, 0, Policy.LRU))
    for clock,tag in enumerate([0xA, 0xA, 0xA, 0xB], start=1):
        c.access(0, tag, clock)
    c.access(0, 0xC, 5)
    assert {l.tag for l in c.lines(0)} == {0xB, 0xC}


@pytest.mark.parametrize('text,expected', [
    ('0', Policy.LRU),
    ('1', Policy.LFU),
    (0, Policy.LRU),
    (1, Policy.LFU),
    ('lru', Policy.LRU),
    ('LFU', Policy.LFU),
    (' Lfu ', Policy.LFU),
    (Policy.LFU, Policy.LFU),
])
def test_policy_parse(text, expected):
    assert Policy.parse(text) is expected


@pytest.mark.parametrize('text', ['2', 'fifo', '', 'random'])
def test_policy_parse_rejects_unknown(text):
    with pytest.raises(ConfigurationError):
        Policy.parse(text)
