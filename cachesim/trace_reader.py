from collections import namedtuple

from .errors import TraceFormatError
from .ui import UI

TraceRecord = namedtuple('TraceRecord', 'kind address size')
TraceRecord.__doc__ = """One data access from a Valgrind trace.
kind   : 'L' (load), 'S' (store) or 'M' (modify)
address: integer address, at most 64 bits wide
size   : number of bytes accessed (not used by the cache)"""


class TraceReader:
    """iterates over a Valgrind (lackey) trace file, one data access at a
    time:

        I 0400d7d4,8      <- instruction fetch, skipped
         L 7ff0005b8,8    <- data accesses start with a space
         M 0421c7f0,4

    Anything not starting with a space (instruction fetches, banners, blank
    lines) is skipped."""
    data_kinds = ('L', 'S', 'M')
    arch = 64

    def __init__(self, trace_filepath):
        self.file_path = trace_filepath
        self.line_no = 0

        # Open file
        self.file = None
        try:
            self.file = open(self.file_path, 'r')
        except (FileNotFoundError, IsADirectoryError, PermissionError):
            UI.error(f'"{self.file_path}" does not exist or cannot be read.')
        return

    def __iter__(self):
        if self.file.closed:
            self.file = open(self.file_path, 'r')
        self.file.seek(0)
        self.line_no = 0
        return self

    def __next__(self):
        while True:
            line = self.file.readline()
            # EOF found
            if line == '':
                self.file.close()
                raise StopIteration
            self.line_no += 1

            # only lines starting with a space are data accesses
            if not line.startswith(' ') or line.strip() == '':
                continue
            line = line.strip()
            if line[0] == 'I':
                continue
            break
        return self.parse_line(line)

    def parse_line(self, line):
        """parse ' K addr,size' into a TraceRecord"""
        try:
            kind,rest = line.split(maxsplit=1)
            addr,size = rest.split(',')
            addr = int(addr, 16)
            size = int(size)
        except ValueError:
            self.__fail('Incorrect record format', line)

        if kind not in self.data_kinds:
            self.__fail(f'Unknown access kind "{kind}"', line)
        if addr < 0 or addr.bit_length() > self.arch:
            self.__fail(f'Address larger than {self.arch} bits', line)
        return TraceRecord(kind, addr, size)

    def __fail(self, what, line):
        raise TraceFormatError(f'While reading "{self.file_path}", '
                               f'line {self.line_no}:\n'
                               f'{what}:\n'
                               f'>>> {line}')

    def close(self):
        if self.file is not None and not self.file.closed:
            self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
