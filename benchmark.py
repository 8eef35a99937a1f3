#!/usr/bin/env python3
"""
Performance Script for the Record Store

Benchmarks:
1. Random-order insertion
2. Sorted-order insertion (degenerate chain)
3. Search hits and misses on both tree shapes
4. In-order traversal
5. Quick sort and selection sort by title

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)
- Tree height
"""

import argparse
import random
import statistics
import string
import time
from typing import List

from bidtree.models import Record
from bidtree.models.trees import BinarySearchTree
from bidtree.sorting import quick_sort, selection_sort


class Benchmark:
    def __init__(self, count: int, seed: int = 7):
        self.count = count
        self.rng = random.Random(seed)

    def generate_title(self, length: int = 12) -> str:
        """Generate a random title of the given length."""
        return ''.join(self.rng.choices(string.ascii_letters + ' ', k=length))

    @staticmethod
    def generate_key(i: int) -> str:
        """Generate a key with zero-padding for sorting."""
        return f"{i:08d}"

    def generate_records(self) -> List[Record]:
        return [
            Record(
                key=self.generate_key(i),
                title=self.generate_title(),
                category="General Fund",
                amount=round(self.rng.uniform(1, 5000), 2),
            )
            for i in range(self.count)
        ]

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_ms": sorted_latencies[0] / 1_000_000,
            "max_ms": sorted_latencies[-1] / 1_000_000,
            "mean_ms": statistics.mean(latencies) / 1_000_000,
            "p50_ms": statistics.median(latencies) / 1_000_000,
            "p95_ms": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000_000,
            "p99_ms": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000_000,
        }

    def bench_insert(self, records: List[Record], description: str) -> tuple[BinarySearchTree, dict]:
        tree = BinarySearchTree()
        latencies = []

        start_time = time.perf_counter_ns()
        for record in records:
            op_start = time.perf_counter_ns()
            tree.insert(record)
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": description,
            "count": len(records),
            "height": tree.height(),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(records) / elapsed if elapsed else float("inf"),
            **self.calculate_stats(latencies),
        }
        return tree, results

    def bench_search(self, tree: BinarySearchTree, keys: List[str], description: str) -> dict:
        latencies = []
        hits = 0

        start_time = time.perf_counter_ns()
        for key in keys:
            op_start = time.perf_counter_ns()
            if tree.search(key) is not None:
                hits += 1
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        return {
            "test": description,
            "count": len(keys),
            "hits": hits,
            "elapsed_sec": elapsed,
            "ops_per_sec": len(keys) / elapsed if elapsed else float("inf"),
            **self.calculate_stats(latencies),
        }

    def bench_traversal(self, tree: BinarySearchTree) -> dict:
        visited = []
        start_time = time.perf_counter_ns()
        tree.in_order(visited.append)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000
        return {"test": "In-order Traversal", "count": len(visited), "elapsed_sec": elapsed}

    def bench_sort(self, records: List[Record], sorter, description: str) -> dict:
        sequence = list(records)
        start_time = time.perf_counter_ns()
        sorter(sequence)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000
        return {"test": description, "count": len(sequence), "elapsed_sec": elapsed}

    @staticmethod
    def print_results(results: dict):
        print(f"\n{'='*60}")
        print(results["test"])
        print(f"{'='*60}")
        for name, value in results.items():
            if name == "test":
                continue
            if isinstance(value, float):
                print(f"  {name:<14} {value:,.4f}")
            else:
                print(f"  {name:<14} {value:,}")

    def run(self, selection_limit: int):
        records = self.generate_records()
        shuffled = list(records)
        self.rng.shuffle(shuffled)

        random_tree, results = self.bench_insert(shuffled, "Random Insert")
        self.print_results(results)
        chain_tree, results = self.bench_insert(records, "Sorted Insert")
        self.print_results(results)

        hit_keys = [r.key for r in shuffled]
        miss_keys = [f"x{k}" for k in hit_keys]
        self.print_results(self.bench_search(random_tree, hit_keys, "Search Hits (random tree)"))
        self.print_results(self.bench_search(chain_tree, hit_keys, "Search Hits (sorted tree)"))
        self.print_results(self.bench_search(random_tree, miss_keys, "Search Misses (random tree)"))

        self.print_results(self.bench_traversal(random_tree))

        self.print_results(self.bench_sort(shuffled, quick_sort, "Quick Sort"))
        self.print_results(
            self.bench_sort(shuffled[:selection_limit], selection_sort, "Selection Sort")
        )


def main():
    parser = argparse.ArgumentParser(description="Benchmark the record tree and sorters")
    parser.add_argument("--count", type=int, default=10_000, help="records to generate")
    parser.add_argument(
        "--selection-limit",
        type=int,
        default=2_000,
        help="records fed to the quadratic selection sort",
    )
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    if args.count <= 0:
        parser.error("--count must be positive")

    Benchmark(args.count, seed=args.seed).run(args.selection_limit)


if __name__ == "__main__":
    main()
