import time
from dataclasses import dataclass

from memgen import make_generator
from mycache import DegenerateRunError, ConfigurationError, build_hierarchy
from rng import RandomStream

ITERATIONS = 1000000
MEM_ACCESS_PROBABILITY = 0.35  # 35% of instructions touch memory
WRITE_PROBABILITY = 0.50  # half of those are writes

GENERATOR_NAMES = ["memGen1", "memGen2", "memGen3", "memGen4", "memGen5"]
LINE_SIZES = [16, 32, 64, 128]


@dataclass(frozen=True)
class SimResult:
    generator: str
    line_size: int
    cpi: float
    l1_hit_rate: float
    l2_hit_rate: float
    avg_mem_access_time: float
    iterations: int = 0
    mem_accesses: int = 0
    total_cycles: int = 0
    mem_cycles: int = 0
    l1_hits: int = 0
    l1_misses: int = 0
    l1_write_backs: int = 0
    l2_hits: int = 0
    l2_misses: int = 0
    l2_write_backs: int = 0
    dram_reads: int = 0
    dram_writes: int = 0
    degenerate: bool = False


def _ratio(num, den):
    if den == 0:
        return 0.0
    return num / den


def run_simulation(gen_name, line_size, iterations=ITERATIONS, protocol="A", policy="random",
                   strict=False, verbose=True):
    """Run one (generator, L1 line size) configuration.

    Every call builds its own random stream, generator and caches, so results
    only depend on the arguments. Ratios with a zero denominator come back as
    0.0 and the result is marked degenerate; with strict=True a run that drew
    no memory instructions raises DegenerateRunError instead.
    """
    if iterations <= 0:
        raise ConfigurationError(f"iterations must be positive, got {iterations}")

    rng = RandomStream()
    gen = make_generator(gen_name, rng)
    hierarchy = build_hierarchy(line_size, rng, protocol=protocol, policy=policy)

    total_cycles = 0
    mem_accesses = 0
    mem_cycles = 0

    if verbose:
        print(f"  Running {gen_name} with L1 line size {line_size}B...", end="", flush=True)
    start = time.perf_counter()

    for _ in range(iterations):
        p = rng.next_double()

        if p <= MEM_ACCESS_PROBABILITY:
            # Memory access instruction
            address = gen()
            mem_accesses += 1

            rdwr = rng.next_double()
            is_write = rdwr >= WRITE_PROBABILITY

            cycles = hierarchy.access(address, is_write)
            total_cycles += cycles
            mem_cycles += cycles
        else:
            # Non-memory instruction, base CPI = 1
            total_cycles += 1

    l1, l2 = hierarchy.l1, hierarchy.l2
    degenerate = mem_accesses == 0 or (l2.hits + l2.misses) == 0
    if mem_accesses == 0 and strict:
        raise DegenerateRunError(f"{gen_name} / {line_size}B drew no memory instructions in {iterations} steps")

    result = SimResult(
        generator=gen_name,
        line_size=line_size,
        cpi=total_cycles / iterations,
        l1_hit_rate=l1.hit_rate(),
        l2_hit_rate=l2.hit_rate(),
        avg_mem_access_time=_ratio(mem_cycles, mem_accesses),
        iterations=iterations,
        mem_accesses=mem_accesses,
        total_cycles=total_cycles,
        mem_cycles=mem_cycles,
        l1_hits=l1.hits,
        l1_misses=l1.misses,
        l1_write_backs=l1.write_backs,
        l2_hits=l2.hits,
        l2_misses=l2.misses,
        l2_write_backs=l2.write_backs,
        dram_reads=hierarchy.dram.reads,
        dram_writes=hierarchy.dram.writes,
        degenerate=degenerate,
    )

    if verbose:
        print(f" CPI = {result.cpi:.3f} ({time.perf_counter() - start:.1f}s)")

    return result


def run_sweep(gen_names=GENERATOR_NAMES, line_sizes=LINE_SIZES, iterations=ITERATIONS, protocol="A",
              policy="random", strict=False, verbose=True):
    results = {}
    for gen_name in gen_names:
        if verbose:
            print(f"Testing {gen_name}:")
        for line_size in line_sizes:
            try:
                results[(gen_name, line_size)] = run_simulation(
                    gen_name, line_size, iterations, protocol, policy, strict, verbose)
            except ConfigurationError as e:
                # a bad configuration only loses its own cell
                print(f"  {gen_name} with L1 line size {line_size}B failed: {e}")
                results[(gen_name, line_size)] = None
        if verbose:
            print()
    return results
