import csv
import sys

from mycache import L1_SIZE, L2_SIZE, L2_LINE_SIZE, L1_ASSOCIATIVITY, L2_ASSOCIATIVITY
from runner import ITERATIONS, MEM_ACCESS_PROBABILITY, WRITE_PROBABILITY

CSV_HEADER = ["Generator", "LineSize", "CPI", "L1_HitRate", "L2_HitRate", "AvgMemTime"]
COLUMN_WIDTH = 12


def print_banner(iterations=ITERATIONS, protocol="A", policy="random", out=sys.stdout):
    print("Two-Level Cache Performance Simulator", file=out)
    print("=====================================", file=out)
    print("Configuration:", file=out)
    print(f"  L1: {L1_SIZE // 1024}KB, {L1_ASSOCIATIVITY}-way, variable line size", file=out)
    print(f"  L2: {L2_SIZE // 1024}KB, {L2_ASSOCIATIVITY}-way, {L2_LINE_SIZE}B line size", file=out)
    print(f"  Memory access probability: {MEM_ACCESS_PROBABILITY:.0%}", file=out)
    print(f"  Write probability: {WRITE_PROBABILITY:.0%}", file=out)
    print(f"  Iterations per test: {iterations:,}", file=out)
    print(f"  Access protocol: {protocol}, replacement: {policy}", file=out)
    print(file=out)


def format_table(title, results, gen_names, line_sizes, value, precision):
    """Pivot one metric into a generator x line size table.

    value picks the number out of a SimResult; missing runs show as n/a.
    """
    lines = [title, "=" * len(title)]
    header = "Generator".rjust(COLUMN_WIDTH)
    for line_size in line_sizes:
        header += f"{line_size}B".rjust(COLUMN_WIDTH)
    lines.append(header)
    lines.append("-" * 60)

    for gen_name in gen_names:
        row = gen_name.rjust(COLUMN_WIDTH)
        for line_size in line_sizes:
            result = results.get((gen_name, line_size))
            if result is None:
                row += "n/a".rjust(COLUMN_WIDTH)
            else:
                row += f"{value(result):{COLUMN_WIDTH}.{precision}f}"
        lines.append(row)
    return "\n".join(lines)


def csv_rows(results, gen_names, line_sizes):
    rows = []
    for gen_name in gen_names:
        for line_size in line_sizes:
            r = results.get((gen_name, line_size))
            if r is None:
                continue
            rows.append([gen_name, line_size, f"{r.cpi:.4f}", f"{r.l1_hit_rate:.4f}",
                         f"{r.l2_hit_rate:.4f}", f"{r.avg_mem_access_time:.4f}"])
    return rows


def write_csv(results, gen_names, line_sizes, out):
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(csv_rows(results, gen_names, line_sizes))


def print_report(results, gen_names, line_sizes, out=sys.stdout):
    print(file=out)
    print(format_table("CPI Results:", results, gen_names, line_sizes, lambda r: r.cpi, 3), file=out)
    print(file=out)
    print(format_table("L1 Hit Rates (%):", results, gen_names, line_sizes,
                       lambda r: r.l1_hit_rate * 100, 1), file=out)
    print(file=out)
    print(format_table("L2 Hit Rates (%):", results, gen_names, line_sizes,
                       lambda r: r.l2_hit_rate * 100, 1), file=out)

    # Data for graphing
    print(file=out)
    print("Data for Graphing (CSV format):", file=out)
    print("===============================", file=out)
    write_csv(results, gen_names, line_sizes, out)

    degenerate = [f"{r.generator}/{r.line_size}B" for r in results.values() if r is not None and r.degenerate]
    if degenerate:
        print(f"\nWarning: zero-denominator ratios for {', '.join(degenerate)}, reported as 0.0", file=out)


def save_csv(results, gen_names, line_sizes, path):
    with open(path, "w", newline="") as f:
        write_csv(results, gen_names, line_sizes, f)
