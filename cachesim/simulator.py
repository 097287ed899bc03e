"""Trace replay loop.

Every record is decoded once. A Load or Store is one elementary access; a
Modify is a Load followed by a Store to the same address, so it performs two
accesses with the same tag and set. The logical clock advances by one before
each elementary access and is what the cache stores as a line's recency.
"""
from .address_formatter import decode
from .cache import Cache
from .errors import TraceFormatError
from .stats import Statistics

DATA_KINDS = ('L', 'S', 'M')


class Simulator:
    def __init__(self, config, observers=None):
        self.config = config
        self.cache = Cache(config)
        self.stats = Statistics()
        self.clock = 0
        # callables receiving (record, outcomes) after every record
        self.observers = list(observers) if observers else []

    def add_observer(self, observer):
        self.observers.append(observer)

    def __access(self, set_index, tag):
        self.clock += 1
        outcome = self.cache.access(set_index, tag, self.clock)
        self.stats.record(outcome)
        return outcome

    def step(self, record):
        """replay one trace record and return the tuple of outcomes it
        produced (two for a Modify, one otherwise)"""
        if record.kind not in DATA_KINDS:
            raise TraceFormatError(f'Cannot replay a "{record.kind}" record, '
                                   f'only {", ".join(DATA_KINDS)} are data '
                                   'accesses.')
        tag, set_index = decode(record.address, self.config)
        outcomes = (self.__access(set_index, tag),)
        if record.kind == 'M':
            outcomes += (self.__access(set_index, tag),)

        for observer in self.observers:
            observer(record, outcomes)
        return outcomes

    def run(self, trace):
        """replay every record of 'trace' (any iterable of records) and
        return the statistics"""
        for record in trace:
            self.step(record)
        return self.stats


def simulate(trace, config):
    """replay 'trace' on a fresh cache built from 'config'"""
    return Simulator(config).run(trace)
