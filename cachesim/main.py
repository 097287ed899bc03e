#!/usr/bin/python3
import os

from .address_formatter import AddrFmt
from .errors import ConfigurationError, TraceFormatError
from .missratio import MissRatio
from .settings import Settings as st
from .simulator import Simulator
from .trace_reader import TraceReader
from .ui import UI
from .util import command_line_args_parser, StatsFile, PlotFile


class VerbosePrinter:
    """Prints one line per trace record: the record as read and the label
    of each access it produced, e.g. 'M 20,1 miss hit', followed by the
    address split in its tag, index and offset fields."""
    def __init__(self, config):
        self.addr_fmt = AddrFmt(config)

    def __call__(self, record, outcomes):
        labels = ' '.join(o.label for o in outcomes)
        line = f'{record.kind} {record.address:x},{record.size} {labels}'
        line = f'{line.ljust(32)} {self.addr_fmt.hex(record.address)}'
        UI.text(line, indent=False)


def simulate(args):
    """run one simulation as described by the command line arguments and
    return the statistics"""
    if args.verbose:
        UI.indent_in(title='CACHE SIMULATOR ARGUMENTS')
        st.describe_args(args)
        UI.indent_out()

    config = st.config_from_args(args)
    if args.verbose:
        UI.indent_in(title='CACHE PARAMETERS')
        config.describe()
        UI.indent_out()

    sim = Simulator(config)
    if args.verbose:
        sim.add_observer(VerbosePrinter(config))
    miss_ratio = None
    if args.plot is not None or args.export is not None:
        miss_ratio = MissRatio(config)
        sim.add_observer(miss_ratio)

    records = 0
    with TraceReader(args.trace) as trace:
        for record in trace:
            sim.step(record)
            records += 1
    stats = sim.stats

    if args.export is not None:
        data = StatsFile.to_dict(config, stats, args.trace, records=records,
                                 metrics=miss_ratio.to_dict())
        StatsFile.save(data, args.export)

    if args.plot is not None:
        trace_name = os.path.basename(args.trace)
        PlotFile.save(miss_ratio.figure(trace_name=trace_name), args.plot)

    return stats


def print_summary(stats):
    """Output the hit and miss statistics"""
    UI.text(stats.summary(), indent=False)


def main(argv=None):
    try:
        args = command_line_args_parser(argv)
        stats = simulate(args)
    except (ConfigurationError, TraceFormatError) as e:
        UI.error(str(e))
    except KeyboardInterrupt:
        UI.indent_set(ind=0)
        UI.info('Process terminated by user.', pre='')
        raise SystemExit(0)
    print_summary(stats)
    return 0


if __name__ == '__main__':
    main()
