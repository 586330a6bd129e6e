import struct

CANONICAL_HEADER_SIZE = 44

# (name, length, description) for each field of the canonical 44-byte header
HEADER_FIELDS = [
    # RIFF chunk
    ('chunk_id', 4, "Chunk_id: marks the file as a riff file"),
    ('chunk_size', 4, "Chunk_data_size: size of the overall file"),
    ('riff_type', 4, "Riff_type_id: file type header, usually WAVE"),
    # fmt sub chunk
    ('fmt_id', 4, "Chunk1 id, usually fmt"),
    ('fmt_size', 4, "Chunk1 size"),
    ('format_tag', 2, "Format. 1 is PCM, 0x11 is IMA ADPCM"),
    ('channels', 2, "Channels"),
    ('sample_rate', 4, "Sample rate"),
    ('byte_rate', 4, "Byte rate"),
    ('block_align', 2, "Block align"),
    ('bits_per_sample', 2, "Bits per sample"),
    # data sub chunk
    ('data_id', 4, "Data chunk header"),
    ('data_size', 4, "Data size"),
]

TAG_FIELDS = ('chunk_id', 'riff_type', 'fmt_id', 'data_id')


def read_u32_le(data, offset=0):
    return struct.unpack('<I', data[offset:offset+4])[0]

def read_u16_le(data, offset=0):
    return struct.unpack('<H', data[offset:offset+2])[0]


class HeaderReader:
    """Forward cursor over a byte buffer."""

    def __init__(self, data):
        self.data = data
        self.offset = 0

    def read(self, length):
        if self.offset + length > len(self.data):
            raise ValueError(f"Read of {length} bytes at {self.offset} runs past end of data ({len(self.data)} bytes)")
        chunk = self.data[self.offset:self.offset+length]
        self.offset += length
        return chunk

    def tell(self):
        return self.offset

    def move(self, position):
        if position < 0 or position > len(self.data):
            raise ValueError(f"Position {position} outside data (0..{len(self.data)})")
        self.offset = position


def parse_header(data):
    """
    Parse the canonical WAV header.
    Tag fields stay as bytes, numeric fields are little-endian ints.
    """
    if len(data) < CANONICAL_HEADER_SIZE:
        raise ValueError(f"Header truncated: {len(data)} bytes, need {CANONICAL_HEADER_SIZE}")

    reader = HeaderReader(data)
    header = {}
    for name, length, _ in HEADER_FIELDS:
        raw = reader.read(length)
        if name in TAG_FIELDS:
            header[name] = raw
        elif length == 4:
            header[name] = read_u32_le(raw)
        else:
            header[name] = read_u16_le(raw)
    return header


def describe_header(data):
    """One line per header field: description and raw bytes in hex."""
    if len(data) < CANONICAL_HEADER_SIZE:
        raise ValueError(f"Header truncated: {len(data)} bytes, need {CANONICAL_HEADER_SIZE}")

    reader = HeaderReader(data)
    lines = []
    for _, length, description in HEADER_FIELDS:
        raw = reader.read(length)
        hex_str = ' '.join(f'{b:02x}' for b in raw)
        lines.append(f"{description}: [{hex_str}]")
    return lines
