import os
from collections import namedtuple
from datetime import datetime

from .errors import ConfigurationError
from .policy import Policy
from .ui import UI


class CacheConfig(namedtuple('CacheConfig',
                             'set_bits lines_per_set block_bits policy')):
    """Immutable cache geometry plus replacement policy.

    set_bits      : s, number of set index bits (2**s sets)
    lines_per_set : E, associativity
    block_bits    : b, number of block offset bits (2**b bytes per block)
    policy        : Policy.LRU or Policy.LFU
    """
    __slots__ = ()

    ############################################################
    #### CONSTANT VALUES
    arch = 64 # address width in bits

    # name in file -> name in class
    key_map = {
        'set_index_bits'   : 'set_bits',
        'lines_per_set'    : 'lines_per_set',
        'block_offset_bits': 'block_bits',
        'policy'           : 'policy',
    }

    def __new__(cls, set_bits, lines_per_set, block_bits, policy=Policy.LRU):
        try:
            set_bits = int(set_bits)
            lines_per_set = int(lines_per_set)
            block_bits = int(block_bits)
        except (TypeError, ValueError):
            raise ConfigurationError('Cache geometry values must be '
                                     'integers.') from None
        policy = Policy.parse(policy)

        if set_bits < 0 or block_bits < 0:
            raise ConfigurationError('Set index bits and block offset bits '
                                     'cannot be negative.')
        if lines_per_set < 1:
            raise ConfigurationError('A set needs at least one line '
                                     f'(got E={lines_per_set}).')
        if set_bits + block_bits > cls.arch:
            raise ConfigurationError(
                f'Set index bits ({set_bits}) plus block offset bits '
                f'({block_bits}) exceed the {cls.arch}-bit address width.')
        return super().__new__(cls, set_bits, lines_per_set, block_bits,
                               policy)

    ############################################################
    #### DERIVED VALUES
    @property
    def num_sets(self):
        return 1 << self.set_bits

    @property
    def tag_bits(self):
        return self.arch - self.set_bits - self.block_bits

    @property
    def block_size(self):
        return 1 << self.block_bits

    @property
    def total_lines(self):
        return self.num_sets * self.lines_per_set

    @classmethod
    def read_file(cls, filename):
        """Read a cache file and return the values it defines, keyed by
        field name. Invalid lines are ignored with a warning."""
        if not os.path.isfile(filename):
            raise ConfigurationError(f'While reading "{filename}":\n'
                                     'File does not exist or cannot be read.')

        name_vals = {}
        with open(filename, 'r') as cache_config_file:
            for line in cache_config_file:
                # get rid of trailing comments
                line = line.split('#')[0].strip()
                if line == '':
                    continue

                # parse <name>:<value>
                key_val_arr = [x.strip() for x in line.split(':')]
                if len(key_val_arr) != 2:
                    UI.warning(f'Ignoring invalid line:\n'
                               f'>>> {line}')
                    continue
                name,val = key_val_arr

                if name not in cls.key_map:
                    UI.warning(f'Ignoring invalid property:\n'
                               f'>>> {line}')
                    continue

                # policy is validated when the config is built
                if name != 'policy':
                    try:
                        val = int(val)
                    except ValueError:
                        UI.warning(f'Ignoring invalid value:\n'
                                   f'>>> {line}')
                        continue

                name_vals[cls.key_map[name]] = val
        return name_vals

    @classmethod
    def from_file(cls, filename, defaults=None):
        """Build a config from a cache file. Missing properties are taken
        from 'defaults' (a CacheConfig), or from Settings."""
        if defaults is None:
            defaults = Settings.default_config()
        return defaults._replace_checked(**cls.read_file(filename))

    def _replace_checked(self, **changes):
        """like _replace(), but validating the result"""
        values = self._asdict()
        values.update(changes)
        return CacheConfig(**values)

    def to_dict(self):
        return {
            'set_index_bits': self.set_bits,
            'lines_per_set': self.lines_per_set,
            'block_offset_bits': self.block_bits,
            'policy': self.policy.name,
            'arch_size_bits': self.arch,
        }

    def describe(self):
        names = [
            'Address Size',
            'Number of Sets',
            'Block Size',
            'Associativity',
            'Policy'
        ]
        vals = [
            f'{self.arch} bits ('
              f'tag:{self.tag_bits} | '
              f'idx:{self.set_bits} | '
              f'off:{self.block_bits})',
            f'{self.num_sets}',
            f'{self.block_size} bytes',
            f'{self.lines_per_set}-way',
            f'{self.policy.name}'
        ]
        UI.columns((names, vals), sep=' : ')
        return


class Settings:
    """Front-end defaults. The simulation core never reads these, it only
    receives the CacheConfig built from them."""
    timestamp = datetime.now().strftime('%Y-%m-%d_%H:%M:%S')

    ############################################################
    #### DEFAULT ARGUMENTS
    sbits = 8
    perset = 1
    bbits = 8
    policy = Policy.LRU
    trace = 'traces/dave.trace'

    @classmethod
    def default_config(cls):
        return CacheConfig(cls.sbits, cls.perset, cls.bbits, cls.policy)

    @classmethod
    def config_from_args(cls, args):
        """Defaults, then the cache file (if any), then explicit flags."""
        if args.cachefile is not None:
            config = CacheConfig.from_file(args.cachefile)
        else:
            config = cls.default_config()

        flags = {
            'set_bits': args.sbits,
            'lines_per_set': args.perset,
            'block_bits': args.bbits,
            'policy': args.policy,
        }
        explicit = {k: v for k,v in flags.items() if v is not None}
        return config._replace_checked(**explicit)

    @classmethod
    def describe_args(cls, args):
        names = ['verbose (v)', 'sbits (s)', 'perset (E)', 'bbits (b)',
                 'policy (p)', 'trace (t)', 'cache (c)']
        vals = ['TRUE' if args.verbose else 'FALSE', args.sbits, args.perset,
                args.bbits, args.policy, args.trace, args.cachefile]
        vals = ['-' if v is None else v for v in vals]
        UI.columns((names, vals), sep=' : ')
        return

    class Plot:
        ############################################################
        #### BASIC VALUES
        # Image to export
        width = 8 # image width
        height = 4 # image height
        dpi = 200 # resolution of the image
        img_border_pad = 0.025 # padding around the image
        img_title_vpad = 6 # padding between the plot and its title

        # line width and colors of the curves
        p_lw = 1.25
        miss_color = '#D9A13BFF'
        evict_color = '#B8403ACC'
        bg_color = '#FFF7E699'

        # grids (independent_variable, function_variable)
        grid_width = (0.4 , 0.6)
        grid_style = ('--', '-')
        grid_alpha = (0.2 , 0.2)

        # Text boxes
        tbox_bg = '#FFFFFFCC'
        tbox_border = '#CC000000' # transparent
        tbox_font = 'monospace'
        tbox_font_size = 9
