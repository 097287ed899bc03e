from enum import Enum

from .policy import Policy, VictimCandidates, select


class Outcome(Enum):
    HIT = 'hit'
    MISS = 'miss'
    MISS_EVICTION = 'evict'

    @property
    def label(self):
        """short string shown in verbose traces"""
        return self.value

    @property
    def is_miss(self):
        return self is not Outcome.HIT


class CacheLine:
    """single cache line, no data storage needed"""
    __slots__ = ('valid', 'tag', 'last_used', 'frequency')

    def __init__(self, valid=False, tag=0, last_used=0, frequency=0):
        self.valid = valid
        self.tag = tag
        self.last_used = last_used # clock of the last access, for LRU
        self.frequency = frequency # hits since installed, for LFU

    def install(self, tag, clock):
        """(re)fill this line with a new block"""
        self.valid = True
        self.tag = tag
        self.last_used = clock
        self.frequency = 0

    def touch(self, clock):
        self.last_used = clock
        self.frequency += 1

    def reset(self):
        self.valid = False
        self.tag = 0
        self.last_used = 0
        self.frequency = 0

    def __repr__(self):
        v = 'v' if self.valid else '_'
        return f'{v}|t:{self.tag:x}|u:{self.last_used}|f:{self.frequency}'


class Cache:
    """Set-associative cache holding only line metadata. The table has
    config.num_sets sets of config.lines_per_set lines each and never
    changes size."""
    def __init__(self, config):
        self.config = config
        self.policy = config.policy
        self.sets = [[CacheLine() for _ in range(config.lines_per_set)]
                     for _ in range(config.num_sets)]
        return

    def access(self, set_index, tag, clock):
        """Look up 'tag' in a set at logical time 'clock' and return the
        Outcome. Only one line of the set is modified."""
        lines = self.sets[set_index]
        candidates = VictimCandidates()
        for i,line in enumerate(lines):
            if not line.valid:
                # set not full: cold miss
                line.install(tag, clock)
                return Outcome.MISS
            if line.tag == tag:
                line.touch(clock)
                return Outcome.HIT
            candidates.consider(i, line)

        # every line is valid and none matched: evict
        victim = select(candidates.lru, candidates.lfu, self.policy)
        lines[victim].install(tag, clock)
        return Outcome.MISS_EVICTION

    def lines(self, set_index):
        """read-only view of a set"""
        return tuple(self.sets[set_index])

    def reset(self):
        """invalidate every line"""
        for s in self.sets:
            for line in s:
                line.reset()
        return

    def __repr__(self):
        ret  = '+--Cache--------------\n'
        for idx,s in enumerate(self.sets):
            if not any(line.valid for line in s):
                continue
            ret += f'| {idx:>4} --> {s}\n'
        ret += '+---------------------'
        return ret


__all__ = ['Cache', 'CacheLine', 'Outcome', 'Policy']
