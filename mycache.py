from collections import namedtuple

# How the engine works
# 1. split the address into tag / set / offset
# 2. scan the ways of that set for a valid line with the same tag
# 3. on a miss pick a victim, report it if it was dirty, and install the new tag in its place
# 4. the hierarchy turns the hit / miss / write-back pattern of both levels into cycles

ADDRESS_BITS = 32

# Cache configuration
DRAM_SIZE = 64 * 1024 * 1024  # 64 MB
L1_SIZE = 16 * 1024  # 16 KB
L2_SIZE = 128 * 1024  # 128 KB
L2_LINE_SIZE = 64  # fixed 64B for L2
L1_ASSOCIATIVITY = 4
L2_ASSOCIATIVITY = 8

# Timing in cycles
L1_HIT_TIME = 1
L2_HIT_TIME = 10
DRAM_ACCESS_TIME = 50

POLICIES = ("random", "random-lru", "lru")
PROTOCOLS = ("A", "B")


class SimulatorError(Exception):
    pass


class ConfigurationError(SimulatorError, ValueError):
    pass


class DegenerateRunError(SimulatorError):
    pass


AccessResult = namedtuple("AccessResult", ["hit", "needs_write_back", "write_back_addr"])


# Helper functions
def log2(x):
    return (x).bit_length() - 1


def is_power_of_two(x):
    return x > 0 and (x & (x - 1)) == 0


class Line:
    def __init__(self):
        self.tag = 0
        self.valid = False
        self.dirty = False
        self.recency = 0

    def put(self, tag, dirty):
        self.tag = tag
        self.valid = True
        self.dirty = dirty

    def remove(self):
        self.tag = 0
        self.valid = False
        self.dirty = False
        self.recency = 0

    def holds(self, tag):
        return self.valid and self.tag == tag

    def isValid(self):
        return self.valid

    def isDirty(self):
        return self.dirty


# Set-associative cache
class Cache:
    def __init__(self, capacity, line_size, assoc, rng=None, policy="random", name="cache"):
        for label, value in (("capacity", capacity), ("line size", line_size), ("associativity", assoc)):
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name}: {label} must be a positive integer, got {value!r}")
        if not is_power_of_two(line_size):
            raise ConfigurationError(f"{name}: line size {line_size} is not a power of two")
        if capacity % (line_size * assoc) != 0:
            raise ConfigurationError(
                f"{name}: capacity {capacity} is not divisible by line size * ways ({line_size} * {assoc})")
        if policy not in POLICIES:
            raise ConfigurationError(f"{name}: unknown replacement policy {policy!r}")
        if policy != "lru" and rng is None:
            raise ConfigurationError(f"{name}: policy {policy!r} needs a random stream")

        self.name = name
        self.capacity = capacity
        self.line_size = line_size
        self.assoc = assoc
        self.num_sets = capacity // (line_size * assoc)  # S = C / (A * B)
        if not is_power_of_two(self.num_sets):
            raise ConfigurationError(f"{name}: set count {self.num_sets} is not a power of two")

        self.n_offset_bits = log2(self.line_size)
        self.n_s_bits = log2(self.num_sets)
        self.n_tag_bits = ADDRESS_BITS - self.n_s_bits - self.n_offset_bits
        if self.n_tag_bits < 0:
            raise ConfigurationError(f"{name}: {capacity} bytes do not fit a {ADDRESS_BITS}-bit address")

        self.rng = rng
        self.policy = policy
        self.data = [[Line() for _ in range(assoc)] for _ in range(self.num_sets)]

        self.hits = 0
        self.misses = 0
        self.write_backs = 0

    def reset(self):
        for cache_set in self.data:
            for line in cache_set:
                line.remove()
        self.hits = 0
        self.misses = 0
        self.write_backs = 0

    def get_line(self, set_index, way):
        return self.data[set_index][way]

    def get_stats(self):
        return self.hits, self.misses, self.write_backs

    def hit_rate(self):
        accesses = self.hits + self.misses
        if accesses == 0:
            return 0.0
        return self.hits / accesses

    def decompose(self, address):
        set_index = (address >> self.n_offset_bits) & ((1 << self.n_s_bits) - 1)
        tag = address >> (self.n_offset_bits + self.n_s_bits)
        return tag, set_index

    def split(self, address):
        tag, set_index = self.decompose(address)
        return tag, set_index, address & (self.line_size - 1)

    def block_address(self, tag, set_index):
        return (tag << (self.n_offset_bits + self.n_s_bits)) | (set_index << self.n_offset_bits)

    def _touch(self, cache_set, way):
        # accessed line becomes the most recent, everyone else ages by one
        for i, line in enumerate(cache_set):
            if i == way:
                line.recency = 0
            else:
                line.recency += 1

    def _victim(self, cache_set):
        if self.policy != "lru":
            # random replacement, recency (if tracked) is ignored
            return self.rng.next_bounded(self.assoc)

        oldest = 0
        for way, line in enumerate(cache_set):
            if not line.isValid():
                return way
            if line.recency > cache_set[oldest].recency:
                oldest = way
        return oldest

    def lookup_or_install(self, address, is_write):  # -> hit, write-back info
        tag, set_index = self.decompose(address)
        cache_set = self.data[set_index]

        # Check for hit
        for way, line in enumerate(cache_set):
            if line.holds(tag):
                self.hits += 1
                if is_write:
                    line.dirty = True
                if self.policy != "random":
                    self._touch(cache_set, way)
                return AccessResult(True, False, None)

        # Cache miss
        self.misses += 1
        victim_way = self._victim(cache_set)
        victim = cache_set[victim_way]

        needs_write_back = False
        write_back_addr = None
        if victim.isValid() and victim.isDirty():
            # the evicted block has to go to the next level
            needs_write_back = True
            self.write_backs += 1
            write_back_addr = self.block_address(victim.tag, set_index)

        victim.put(tag, is_write)
        if self.policy != "random":
            self._touch(cache_set, victim_way)

        return AccessResult(False, needs_write_back, write_back_addr)


# DRAM: fixed latency, infinite capacity, never misses
class DRAM:
    def __init__(self, access_time):
        self.access_time = access_time
        self.reads = 0
        self.writes = 0

    def get_stats(self):
        return self.reads, self.writes

    def read(self):
        self.reads += 1
        return self.access_time

    def write(self):
        self.writes += 1
        return self.access_time


class MemoryHierarchy:
    def __init__(self, l1, l2, dram, protocol="A"):
        if protocol not in PROTOCOLS:
            raise ConfigurationError(f"unknown access protocol {protocol!r}, expected one of {PROTOCOLS}")
        self.l1 = l1
        self.l2 = l2
        self.dram = dram
        self.protocol = protocol

    def access(self, address, is_write):
        if self.protocol == "A":
            return self._access_write_back(address, is_write)
        return self._access_no_write_back(address, is_write)

    # Variant A: L1 write-backs go through L2, L2 write-backs go to DRAM
    def _access_write_back(self, address, is_write):
        l1_result = self.l1.lookup_or_install(address, is_write)
        cycles = L1_HIT_TIME

        if l1_result.needs_write_back:
            wb_result = self.l2.lookup_or_install(l1_result.write_back_addr, True)
            cycles += L2_HIT_TIME
            if wb_result.needs_write_back:
                cycles += self.dram.write()

        if l1_result.hit:
            return cycles

        # fill from L2, loaded clean
        l2_result = self.l2.lookup_or_install(address, False)
        cycles += L2_HIT_TIME
        if not l2_result.hit:
            cycles += self.dram.read()
        if l2_result.needs_write_back:
            cycles += self.dram.write()

        return cycles

    # Variant B: no write-back traffic, L2 sees the request direction
    def _access_no_write_back(self, address, is_write):
        l1_result = self.l1.lookup_or_install(address, is_write)
        cycles = L1_HIT_TIME
        if l1_result.hit:
            return cycles

        l2_result = self.l2.lookup_or_install(address, is_write)
        cycles += L2_HIT_TIME
        if not l2_result.hit:
            cycles += self.dram.read()
        return cycles


def build_hierarchy(l1_line_size, rng, protocol="A", policy="random"):
    l1 = Cache(L1_SIZE, l1_line_size, L1_ASSOCIATIVITY, rng, policy, name="L1")
    l2 = Cache(L2_SIZE, L2_LINE_SIZE, L2_ASSOCIATIVITY, rng, policy, name="L2")
    dram = DRAM(DRAM_ACCESS_TIME)
    return MemoryHierarchy(l1, l2, dram, protocol)
