from dataclasses import dataclass

MASK32 = 0xFFFFFFFF

HASH_INIT = 1779033703
HASH_MUL = 3432918353
MULBERRY_INC = 0x6D2B79F5
TWO_32 = 4294967296  # 2^32

def imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (unsigned result)."""
    return ((a & MASK32) * (b & MASK32)) & MASK32

def rotl32(x: int, n: int) -> int:
    x &= MASK32
    return ((x << n) | (x >> (32 - n))) & MASK32

def _code_units(text: str):
    # UTF-16 code units, so astral characters contribute two surrogates.
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)

def hash_seed(text: str) -> int:
    """Hash seed text to the unsigned 32-bit value that starts a stream."""
    h = HASH_INIT
    for unit in _code_units(text):
        h = imul(h ^ unit, HASH_MUL)
        h = rotl32(h, 13)
    return h

@dataclass
class Mulberry32:
    state: int

    def __post_init__(self) -> None:
        self.state &= MASK32

    def next32(self) -> int:
        self.state = (self.state + MULBERRY_INC) & MASK32
        t = self.state
        t = imul(t ^ (t >> 15), t | 1)
        t ^= (t + imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    def random(self) -> float:
        # Exact: any 32-bit integer over 2^32 is representable as a double.
        return self.next32() / TWO_32

    __call__ = random

    def index(self, n: int) -> int:
        """Uniform index in 0..n-1, i.e. floor(random() * n)."""
        assert n > 0
        return int(self.random() * n)

def make_rng(seed: int) -> Mulberry32:
    return Mulberry32(seed)

def rng_for_text(text: str) -> Mulberry32:
    return Mulberry32(hash_seed(text))
