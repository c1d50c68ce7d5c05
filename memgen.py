"""Synthetic address generators.

Each generator is a small object called once per memory instruction. They are
built fresh for every run so counters never leak from one run into the next.
"""

from mycache import DRAM_SIZE, ConfigurationError


class SequentialGen:
    # addr++ wrapping at limit, first address is 0
    def __init__(self, limit):
        self.limit = limit
        self.addr = 0

    def __call__(self):
        addr = self.addr % self.limit
        self.addr += 1
        return addr


class StridedGen:
    # addr += stride wrapping at limit, first address is one stride in
    def __init__(self, stride, limit):
        self.stride = stride
        self.limit = limit
        self.addr = 0

    def __call__(self):
        self.addr += self.stride
        return self.addr % self.limit


class UniformGen:
    # draws from the run's random stream, so it interleaves with the other draws
    def __init__(self, rng, limit):
        self.rng = rng
        self.limit = limit

    def __call__(self):
        return self.rng.next32() % self.limit


GENERATORS = {
    "memGen1": lambda rng: SequentialGen(DRAM_SIZE),
    "memGen2": lambda rng: UniformGen(rng, 24 * 1024),
    "memGen3": lambda rng: UniformGen(rng, DRAM_SIZE),
    "memGen4": lambda rng: SequentialGen(4 * 1024),
    "memGen5": lambda rng: StridedGen(32, 64 * 16 * 1024),
}


def make_generator(name, rng):
    if name not in GENERATORS:
        raise ConfigurationError(f"unknown address generator {name!r}, expected one of {', '.join(GENERATORS)}")
    return GENERATORS[name](rng)
