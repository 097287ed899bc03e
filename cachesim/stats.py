from .cache import Outcome


class Statistics:
    """Hit, miss and eviction counters. Only the Simulator records into
    them; everyone else reads."""
    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def record(self, outcome):
        if outcome is Outcome.HIT:
            self.hits += 1
        else:
            self.misses += 1
            if outcome is Outcome.MISS_EVICTION:
                self.evictions += 1
        return

    @property
    def accesses(self):
        return self.hits + self.misses

    @property
    def miss_ratio(self):
        if self.accesses == 0:
            return 0.0
        return self.misses / self.accesses

    def to_dict(self):
        return {
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
        }

    @classmethod
    def from_dict(cls, data):
        stats = cls()
        stats.hits = int(data['hits'])
        stats.misses = int(data['misses'])
        stats.evictions = int(data['evictions'])
        return stats

    def summary(self):
        """the one-line summary printed at the end of a run"""
        return (f'hits:{self.hits} misses:{self.misses} '
                f'evictions:{self.evictions}')

    def __eq__(self, other):
        if not isinstance(other, Statistics):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'Statistics({self.summary()})'
