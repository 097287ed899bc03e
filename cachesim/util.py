import json
import matplotlib.pyplot as plt
import argparse # to get command line arguments
from jsonschema import validate, ValidationError # to validate stats files

from .settings import Settings as st, CacheConfig
from .stats import Statistics
from .ui import UI


class StatsFile:
    fmt_name = 'stats'
    ext = 'json'
    schema = {
        'type' : 'object',
        'properties' : {
            'meta'  : {
                'type' : 'object',
                'properties' : {
                    'timestamp' : {'type' : 'string'}
                }
            },
            'cache' : {
                'type' : 'object',
                'properties' : {
                    'set_index_bits'    : {'type' : 'integer', 'minimum' : 0},
                    'lines_per_set'     : {'type' : 'integer', 'minimum' : 1},
                    'block_offset_bits' : {'type' : 'integer', 'minimum' : 0},
                    'policy'            : {'enum' : ['LRU', 'LFU']}
                },
                'required' : ['set_index_bits', 'lines_per_set',
                              'block_offset_bits', 'policy']
            },
            'trace' : {
                'type' : 'object',
                'properties' : {
                    'path'    : {'type' : 'string'},
                    'records' : {'type' : 'integer', 'minimum' : 0}
                },
                'required' : ['path']
            },
            'stats' : {
                'type' : 'object',
                'properties' : {
                    'hits'      : {'type' : 'integer', 'minimum' : 0},
                    'misses'    : {'type' : 'integer', 'minimum' : 0},
                    'evictions' : {'type' : 'integer', 'minimum' : 0}
                },
                'required' : ['hits', 'misses', 'evictions']
            },
            'metrics' : {'type' : ['object', 'null']}
        },
        'required' : ['meta', 'cache', 'trace', 'stats']
    }

    @classmethod
    def to_dict(cls, config, stats, trace_path, records=0, metrics=None):
        return {
            'meta' : {'timestamp' : st.timestamp},
            'cache' : config.to_dict(),
            'trace' : {'path' : str(trace_path), 'records' : records},
            'stats' : stats.to_dict(),
            'metrics' : metrics,
        }

    @classmethod
    def save(cls, data:dict, filename):
        # Verify data is a correctly formed stats dictionary
        try:
            validate(instance=data, schema=cls.schema)
        except ValidationError as e:
            UI.error('The data being saved constitutes a malformed '
                     f'{cls.fmt_name} file:\n'
                     f'{e.message}')

        try:
            with open(filename, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            UI.error(f'While trying to save {filename}.\n\n'
                     f'{e}')
        UI.info(f'Statistics saved to {filename}', pre='')
        return

    @classmethod
    def load(cls, filepath):
        """return (CacheConfig, Statistics, file_dict) from a stats file"""
        try:
            with open(filepath, 'r') as open_file:
                file_dict = json.load(open_file)
        except OSError:
            UI.error(f'While reading "{filepath}". File does not exist or '
                     'cannot be read.')
        except json.JSONDecodeError:
            UI.error(f'While reading "{filepath}". File does not seem to '
                     f'be a valid {cls.ext} file.')

        # Verify this is a valid stats file
        try:
            validate(instance=file_dict, schema=cls.schema)
        except ValidationError as e:
            UI.error(f'While reading "{filepath}". This seems to be a '
                     f'malformed {cls.fmt_name} file:\n'
                     f'{e.message}')

        cache = file_dict['cache']
        config = CacheConfig(cache['set_index_bits'], cache['lines_per_set'],
                             cache['block_offset_bits'], cache['policy'])
        return config, Statistics.from_dict(file_dict['stats']), file_dict


class PlotFile:
    formats = ('png', 'pdf')

    @classmethod
    def save(cls, mpl_fig, filename):
        ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
        if ext not in cls.formats:
            plt.close(mpl_fig)
            UI.error(f'Cannot save plot as "{filename}". Use one of: '
                     f'{", ".join(cls.formats)}.')
        try:
            mpl_fig.savefig(filename, dpi=st.Plot.dpi, bbox_inches='tight',
                            pad_inches=st.Plot.img_border_pad)
        except Exception as e:
            UI.error(f'While trying to save {filename}:\n\n'
                     f'{e}')
        finally:
            plt.close(mpl_fig)
        UI.info(f'Plot saved to {filename}', pre='')
        return


def command_line_args_parser(argv=None):
    synopsis = ('Cache simulator. Replays a Valgrind memory trace on a '
                'set-associative cache and\n'
                'reports the number of hits, misses and evictions.')
    cache_conf = ('cache file:\n'
                  '  The cache file must have this format:\n'
                  '\n'
                  f'   # Comments start with pound sign\n'
                  f'   set_index_bits    : <value> # default: {st.sbits}\n'
                  f'   lines_per_set     : <value> # default: {st.perset}\n'
                  f'   block_offset_bits : <value> # default: {st.bbits}\n'
                  f'   policy            : <value> # default: {st.policy}\n'
                  '\n'
                  '  Options given in the command line override the values '
                  'in the file.')

    examples = ('examples:\n'
                '  linux>  cachesim -s 4 -E 1 -b 4 -t traces/yi.trace\n'
                '  linux>  cachesim -v -s 8 -E 2 -b 4 -p 1 -t traces/yi.trace\n'
                '  linux>  cachesim -c mycache.conf -t traces/long.trace '
                '-x long.json -P long.png')

    parser = argparse.ArgumentParser(
        prog='cachesim',
        description=synopsis+'\n\n',
        epilog=cache_conf+'\n\n'+examples,
        formatter_class=argparse.RawTextHelpFormatter)

    parser.add_argument(
        '-v', '--verbose', dest='verbose', action='store_true',
        help='Print the arguments, the cache and one line per trace record.'
    )

    parser.add_argument(
        '-s', '--sbits', metavar='NUM', dest='sbits',
        type=int, default=None,
        help=f'Number of set index bits (default: {st.sbits}).'
    )

    parser.add_argument(
        '-E', '--perset', metavar='NUM', dest='perset',
        type=int, default=None,
        help=f'Number of lines per set (default: {st.perset}).'
    )

    parser.add_argument(
        '-b', '--bbits', metavar='NUM', dest='bbits',
        type=int, default=None,
        help=f'Number of block offset bits (default: {st.bbits}).'
    )

    parser.add_argument(
        '-p', '--policy', metavar='POLICY', dest='policy',
        type=str, default=None,
        help=('Replacement policy:\n'
              '    0 | LRU : Least Recently Used (default)\n'
              '    1 | LFU : Least Frequently Used')
    )

    parser.add_argument(
        '-t', '--trace', metavar='FILE', dest='trace',
        type=str, default=st.trace,
        help=f'Valgrind trace to replay (default: {st.trace}).'
    )

    parser.add_argument(
        '-c', '--cache', metavar='CACHE', dest='cachefile',
        type=str, default=None,
        help='File describing the cache. See "cache file" section.'
    )

    parser.add_argument(
        '-x', '--export', metavar='JSON', dest='export',
        type=str, default=None,
        help='Save the statistics (and miss ratio data) to a JSON file.'
    )

    parser.add_argument(
        '-P', '--plot', metavar='IMAGE', dest='plot',
        type=str, default=None,
        help=('Save a plot of the miss ratio over time.\n'
              'Format: <name>.png | <name>.pdf')
    )

    return parser.parse_args(argv)
