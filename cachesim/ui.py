import sys # to define where to write output
from colorama import Fore, Style # for colored messages
from itertools import zip_longest # to print columns of different lengths

class UI:
    ############################################################
    #### CONSTANT VALUES
    il = 0 # indentation level
    iw = 4 # indentation width
    ind = '' # the actual indentation string

    @classmethod
    def __color_msg(cls, msg='', pre='', indent=True, msg_color=None,
                    end='\n', out=None):
        """Message has some parts:
        .------+-------------------------------------- indentation
        |      |
               WARNING: the message I want to say\n
                  |              |                +-- end
                  |              +------------------- message
                  +---------------------------------- pre-message
        """
        if out is None:
            out = sys.stdout
        ind_str = cls.ind if indent and len(msg) > 0 else ''

        # add ': ' to pre-message
        if len(msg) > 0 and len(pre) > 0:
            pre = f'{Style.BRIGHT}{pre}{Style.NORMAL}: '

        # Add indentation to all lines of the message
        msg = f'\n{ind_str}'.join(msg.split('\n'))

        # plain text (no color) is left free of escape codes
        if msg_color is None:
            print(f'{ind_str}{pre}{msg}', file=out, end=end)
        else:
            print(f'{msg_color}{ind_str}{pre}{msg}{Style.RESET_ALL}',
                  file=out, end=end)
        if end != '\n':
            out.flush()
        return

    @classmethod
    def __stream(cls, out):
        """resolve 'out'/'err' at call time, streams may be redirected"""
        return sys.stdout if out == 'out' else sys.stderr

    @classmethod
    def indent_in(cls, title=''):
        """Increase indentation with a possible title"""
        if title:
            msg_str = f'{Style.BRIGHT}{title}{Style.NORMAL}'
            cls.__color_msg(msg=msg_str, msg_color=Fore.GREEN,
                            out=cls.__stream('err'))
        cls.il += 1
        cls.ind = ' ' * (cls.il*cls.iw)
        return

    @classmethod
    def indent_out(cls):
        """decrease indentation"""
        cls.il = max(cls.il - 1, 0)
        cls.ind = ' ' * (cls.il*cls.iw)
        return

    @classmethod
    def indent_set(cls, ind=0):
        """set indentation directly"""
        cls.il = max(ind, 0)
        cls.ind = ' ' * (cls.il*cls.iw)
        return

    @classmethod
    def error(cls, msg, pre='ERROR', do_exit=True, code=1):
        """print an error message to stderr and possibly exit with a
        given code"""
        cls.__color_msg(msg=msg, pre=pre, msg_color=Fore.RED,
                        out=cls.__stream('err'))
        if code == 0:
            code = 1
        if do_exit:
            raise SystemExit(code)
        return

    @classmethod
    def warning(cls, msg, pre='WARNING'):
        """print a warning message to stderr"""
        cls.__color_msg(msg=msg, pre=pre, msg_color=Fore.YELLOW,
                        out=cls.__stream('err'))
        return

    @classmethod
    def info(cls, msg, pre='INFO', out='err'):
        """print an informative message to (by default) stderr"""
        cls.__color_msg(msg=msg, pre=pre, msg_color=Fore.CYAN,
                        out=cls.__stream(out))
        return

    @classmethod
    def text(cls, msg, indent=True, end='\n', out='out'):
        """print regular text to (by default) stdout and respecting the
        current indentation level."""
        cls.__color_msg(msg=msg, indent=indent, end=end,
                        out=cls.__stream(out))
        return

    @classmethod
    def nl(cls, out='out'):
        """print a new line '\n' by default to stdout"""
        cls.__color_msg(out=cls.__stream(out))
        return

    @classmethod
    def columns(cls, cols, sep='', cols_align='l', header=False,
                get_str=False, out='err'):
        """Print a table with columns, each one as wide as its widest
        element."""
        if len(cols) == 0:
            cls.error('UI.columns: Printing empty array.')

        cols_width = []
        for col in cols:
            col_width = 0
            for text in col:
                col_width = max(col_width, len(str(text)))
            cols_width.append(col_width)

        if cols_align == 'l':
            cols_align = 'l' * len(cols)
        elif cols_align == 'r':
            cols_align = 'r' * len(cols)
        elif len(cols_align) != len(cols):
            cls.error(f'UI.columns(): cols_align is not \'l\' or \'r\'. '
                      f'Then, the number of columns ({len(cols)}) and '
                      f'number of cols_align values {len(cols_align)} '
                      'is not the same.')

        # Create rows
        all_lines = []
        for elems in zip_longest(*cols, fillvalue=''):
            line_elems = []
            for i,el in enumerate(elems):
                if cols_align[i] == 'r':
                    line_elems.append(str(el).rjust(cols_width[i]))
                else:
                    line_elems.append(str(el).ljust(cols_width[i]))
            all_lines.append(sep.join(line_elems))

        if header:
            all_lines[0] = f'{Style.BRIGHT}{all_lines[0]}{Style.NORMAL}'

        table = '\n'.join(all_lines)
        if not get_str:
            cls.__color_msg(msg=table, out=cls.__stream(out))
        return table
