"""Replacement policies.

Victim selection happens in two steps. While scanning a full set, the cache
keeps two candidates side by side:

- the LRU candidate: the line with the smallest `last_used`.
- the LFU candidate: the line with the smallest `frequency`. Among lines
  sharing that frequency, the one with the smallest `last_used` wins. Its
  recency is only compared against other lines of the same frequency, never
  against the LRU candidate.

`select()` then returns one of them according to the configured policy.
"""
from enum import Enum

from .errors import ConfigurationError


class Policy(Enum):
    LRU = 0
    LFU = 1

    @classmethod
    def parse(cls, value):
        """Accept the numeric flag (0, 1) or the policy name, any case."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for policy in cls:
            if text.upper() == policy.name or text == str(policy.value):
                return policy
        raise ConfigurationError(f'Unknown replacement policy "{value}". '
                                 'Use 0 (LRU) or 1 (LFU).')

    def __str__(self):
        return self.name


class VictimCandidates:
    """Running LRU and LFU minimums over the valid lines of one set."""
    def __init__(self):
        self.lru = None # index of the least recently used line
        self.lfu = None # index of the least frequently used line
        self.__lru_time = None
        self.__lfu_freq = None
        self.__lfu_time = None

    def consider(self, index, line):
        if self.lru is None or line.last_used < self.__lru_time:
            self.lru = index
            self.__lru_time = line.last_used

        if (self.lfu is None or line.frequency < self.__lfu_freq or
                (line.frequency == self.__lfu_freq and
                 line.last_used < self.__lfu_time)):
            self.lfu = index
            self.__lfu_freq = line.frequency
            self.__lfu_time = line.last_used
        return


def select(lru_candidate, lfu_candidate, policy):
    """return the index of the line to evict"""
    if policy is Policy.LFU:
        return lfu_candidate
    return lru_candidate


__all__ = ['Policy', 'VictimCandidates', 'select']
