def split(address, config):
    """Splits an address into its tag, set index, and block offset parts."""
    offset_mask = (1 << config.block_bits) - 1
    offset = address & offset_mask
    index_mask = (1 << config.set_bits) - 1
    index = (address >> config.block_bits) & index_mask
    tag_mask = (1 << config.tag_bits) - 1
    tag = (address >> (config.set_bits + config.block_bits)) & tag_mask
    return tag, index, offset


def decode(address, config):
    """return (tag, set_index) of an address. The block offset is not
    needed by the cache, since no data is stored."""
    tag, index, _ = split(address, config)
    return tag, index


class AddrFmt:
    """Renders addresses split in their |T:tag| I:index| O:offset| fields,
    padded to the widths given by the cache configuration."""
    def __init__(self, config):
        self.config = config
        self.max_tag = 2**config.tag_bits - 1
        self.max_index = 2**config.set_bits - 1
        self.max_offset = 2**config.block_bits - 1

    def bin(self, address):
        """Shows the split binary form of an address"""
        return self.__fmt(address, 2)

    def hex(self, address):
        """Shows the split hexadecimal form of an address"""
        return self.__fmt(address, 16)

    def __fmt(self, address, base):
        tag, index, offset = split(address, self.config)
        return ("|T:"  + self.pad(tag,    base, self.max_tag)   +
                "| I:" + self.pad(index,  base, self.max_index) +
                "| O:" + self.pad(offset, base, self.max_offset)+
                "|")

    @staticmethod
    def pad(number, base, max_val):
        """zero-pad number to the width of max_val, grouping binary digits
        by four. Fields of zero width are rendered as '-'."""
        if base == 2:
            conv_number = bin(number)[2:]
            max_num_width = max_val.bit_length()
            group_digits = 4
        elif base == 16:
            conv_number = hex(number)[2:]
            max_num_width = (max_val.bit_length() + 3) // 4
            group_digits = max_num_width
        else:
            raise ValueError("Unexpected base. use either 2 or 16")
        if max_num_width == 0:
            return '-'
        padded = conv_number.zfill(max_num_width)

        # group from the least significant digit
        groups = []
        while padded:
            groups.insert(0, padded[-group_digits:])
            padded = padded[:-group_digits]
        return ' '.join(groups)
