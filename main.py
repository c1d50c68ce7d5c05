import argparse
import sys

from crosscheck import print_crosscheck
from memgen import GENERATORS
from mycache import L1_SIZE, L1_ASSOCIATIVITY, POLICIES, PROTOCOLS, SimulatorError
from report import print_banner, print_report, save_csv
from runner import ITERATIONS, GENERATOR_NAMES, LINE_SIZES, run_sweep

# The memory subsystem consists of an L1 cache, an L2 cache, and DRAM.
# L1 is 16KB 4-way with a variable line size, L2 is 128KB 8-way with 64B lines.
# The cache replacement algorithm is Random, driven by the same random stream as the instruction mix.
# Access times: L1 1 cycle, L2 10 cycles, DRAM 50 cycles. Non-memory instructions take 1 cycle.
# Every generator is run against every L1 line size and the results are tabulated.


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Two-level cache performance simulator")
    p.add_argument("--iterations", type=int, default=ITERATIONS, help="Instructions simulated per run.")
    p.add_argument("--generators", nargs="+", default=GENERATOR_NAMES, choices=list(GENERATORS),
                   help="Address generators to sweep.")
    p.add_argument("--line-sizes", nargs="+", type=int, default=LINE_SIZES, help="L1 line sizes in bytes.")
    p.add_argument("--protocol", default="A", choices=PROTOCOLS,
                   help="A: write-backs cascade through L2 to DRAM, B: no write-back traffic.")
    p.add_argument("--policy", default="random", choices=POLICIES,
                   help="Victim choice: random, random with LRU bookkeeping, or true LRU.")
    p.add_argument("--csv", metavar="PATH", help="Also write the CSV results to PATH.")
    p.add_argument("--strict", action="store_true", help="Fail runs that draw no memory instructions.")
    p.add_argument("--crosscheck", action="store_true",
                   help="Compare the L1 model against pycachesim before the sweep.")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.iterations <= 0:
        print("error: --iterations must be positive", file=sys.stderr)
        return 2

    try:
        if args.crosscheck and print_crosscheck(args.generators, args.line_sizes, L1_SIZE,
                                                L1_ASSOCIATIVITY, min(args.iterations, 100000)):
            print("error: L1 model disagrees with pycachesim", file=sys.stderr)
            return 1

        print_banner(args.iterations, args.protocol, args.policy)
        results = run_sweep(args.generators, args.line_sizes, args.iterations, args.protocol,
                            args.policy, args.strict)
    except SimulatorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print_report(results, args.generators, args.line_sizes)
    if args.csv:
        save_csv(results, args.generators, args.line_sizes, args.csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
