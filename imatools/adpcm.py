"""
IMA/DVI ADPCM decoder.

4-bit codes, one sign bit (bit 3) and three magnitude bits scaled by a
running step size. The step size adapts after every code through
INDEX_TABLE / STEP_TABLE.

Reference: http://www.cs.columbia.edu/~hgs/audio/dvi/IMA_ADPCM.pdf
"""

INDEX_TABLE = (
    -1, -1, -1, -1, 2, 4, 6, 8,
    -1, -1, -1, -1, 2, 4, 6, 8
)

STEP_TABLE = (
    7, 8, 9, 10, 11, 12, 13, 14, 16, 17,
    19, 21, 23, 25, 28, 31, 34, 37, 41, 45,
    50, 55, 60, 66, 73, 80, 88, 97, 107, 118,
    130, 143, 157, 173, 190, 209, 230, 253, 279, 307,
    337, 371, 408, 449, 494, 544, 598, 658, 724, 796,
    876, 963, 1060, 1166, 1282, 1411, 1552, 1707, 1878, 2066,
    2272, 2499, 2749, 3024, 3327, 3660, 4026, 4428, 4871, 5358,
    5894, 6484, 7132, 7845, 8630, 9493, 10442, 11487, 12635, 13899,
    15289, 16818, 18500, 20350, 22385, 24623, 27086, 29794, 32767
)

MIN_SAMPLE = -32768
MAX_SAMPLE = 32767
MAX_STEP_INDEX = len(STEP_TABLE) - 1

NIBBLE_ORDERS = ('hi_lo', 'lo_hi')

# 'full' decodes every code, 'drop_last' decodes all but the final code
TAIL_POLICIES = ('full', 'drop_last')


def _check_option(kind, value, allowed):
    if value not in allowed:
        raise ValueError(f"Unknown {kind}: {value}")


def unpack_nibbles(data, nibble_order='hi_lo'):
    """Split each byte into two 4-bit codes, high nibble first by default."""
    _check_option("nibble order", nibble_order, NIBBLE_ORDERS)

    codes = []
    for byte in data:
        hi = byte >> 4
        lo = byte & 0x0F
        if nibble_order == 'hi_lo':
            codes.append(hi)
            codes.append(lo)
        else:
            codes.append(lo)
            codes.append(hi)
    return codes


class DecoderState:
    """Predictor and quantizer state carried from one code to the next."""

    def __init__(self, predicted_sample=0, step_index=0):
        self.predicted_sample = predicted_sample
        self.step_index = max(0, min(MAX_STEP_INDEX, step_index))
        self.step_size = STEP_TABLE[self.step_index]

    def as_tuple(self):
        return (self.predicted_sample, self.step_index, self.step_size)

    def __repr__(self):
        return (f"DecoderState(predicted_sample={self.predicted_sample}, "
                f"step_index={self.step_index}, step_size={self.step_size})")


def decode_nibble(state, code):
    """Apply one code to `state` and return the reconstructed sample."""
    step = state.step_size
    diff = step >> 3
    if code & 4: diff += step
    if code & 2: diff += (step >> 1)
    if code & 1: diff += (step >> 2)
    if code & 8:
        diff = -diff

    # Clamped value is both emitted and fed back as the next prediction
    sample = max(MIN_SAMPLE, min(MAX_SAMPLE, state.predicted_sample + diff))

    state.step_index += INDEX_TABLE[code]
    if state.step_index < 0: state.step_index = 0
    elif state.step_index > MAX_STEP_INDEX: state.step_index = MAX_STEP_INDEX
    state.step_size = STEP_TABLE[state.step_index]

    state.predicted_sample = sample
    return sample


def decode_with_state(codes, state=None, tail='full'):
    """
    Decode a sequence of 4-bit codes in order.
    Returns (samples, final_state). A fresh state is used when none is given.
    """
    _check_option("tail policy", tail, TAIL_POLICIES)
    if state is None:
        state = DecoderState()

    count = len(codes)
    if tail == 'drop_last' and count > 0:
        count -= 1

    samples = []
    for i in range(count):
        samples.append(decode_nibble(state, codes[i]))
    return samples, state


def decode(codes, tail='full'):
    samples, _ = decode_with_state(codes, tail=tail)
    return samples


class DviAdpcmDecoder:
    """
    Bytes in, 16-bit PCM samples out.
    Each call to decode() starts from the initial IMA state (0, 0).
    """

    def __init__(self, nibble_order='hi_lo', tail='full'):
        _check_option("nibble order", nibble_order, NIBBLE_ORDERS)
        _check_option("tail policy", tail, TAIL_POLICIES)
        self.nibble_order = nibble_order
        self.tail = tail
        self.state = None

    def decode(self, data):
        codes = unpack_nibbles(data, self.nibble_order)
        samples, self.state = decode_with_state(codes, tail=self.tail)
        return samples
