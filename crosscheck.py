from cachesim import CacheSimulator, Cache, MainMemory

from memgen import make_generator
from mycache import Cache as SetAssociativeCache, ConfigurationError
from rng import RandomStream

# Replays a read-only address stream through our L1 model (LRU victims) and
# through pycachesim with the same geometry. Both should agree on every hit
# and miss, which checks the tag / set split and the associative lookup
# against an independent simulator.


def reference_cache(capacity, line_size, assoc):
    num_sets = capacity // (line_size * assoc)
    mem = MainMemory()
    l1 = Cache("L1", num_sets, assoc, line_size, "LRU", write_back=True, write_allocate=True)
    mem.load_to(l1)
    mem.store_from(l1)
    return CacheSimulator(l1, mem), l1


def crosscheck(gen_name, capacity, line_size, assoc, accesses):
    """Return ((hits, misses) of our cache, (hits, misses) of pycachesim)."""
    rng = RandomStream()
    gen = make_generator(gen_name, rng)
    ours = SetAssociativeCache(capacity, line_size, assoc, policy="lru", name="L1")
    cs, ref = reference_cache(capacity, line_size, assoc)

    for _ in range(accesses):
        address = gen()
        ours.lookup_or_install(address, False)
        cs.load(address)

    return (ours.hits, ours.misses), (ref.HIT_count, ref.MISS_count)


def print_crosscheck(gen_names, line_sizes, capacity, assoc, accesses):
    mismatches = 0
    print(f"Cross-check against pycachesim ({capacity // 1024}KB, {assoc}-way, LRU, {accesses:,} loads):")
    for gen_name in gen_names:
        for line_size in line_sizes:
            try:
                ours, ref = crosscheck(gen_name, capacity, line_size, assoc, accesses)
            except ConfigurationError as e:
                # same as the sweep, a bad geometry only loses its own line
                print(f"  {gen_name:>8} {line_size:>4}B  skipped: {e}")
                continue
            status = "ok" if ours == ref else "MISMATCH"
            if ours != ref:
                mismatches += 1
            print(f"  {gen_name:>8} {line_size:>4}B  ours hits/misses = {ours[0]}/{ours[1]}"
                  f"  pycachesim = {ref[0]}/{ref[1]}  {status}")
    print()
    return mismatches
