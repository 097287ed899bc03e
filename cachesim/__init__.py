"""Set-associative cache simulator for Valgrind memory traces."""
from .address_formatter import decode
from .cache import Cache, CacheLine, Outcome
from .errors import ConfigurationError, TraceFormatError
from .policy import Policy
from .settings import CacheConfig
from .simulator import Simulator, simulate
from .stats import Statistics
from .trace_reader import TraceReader, TraceRecord

__version__ = '1.0'
