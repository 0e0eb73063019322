"""Quick start guide for simindex.

This example shows the minimal code needed to:
1. Build an exact and an approximate index over the same points
2. Search both with the same call
3. Measure how closely the approximate answers track the exact ones
"""

import numpy as np
from simindex import HNSWIndex, NaiveIndex, VectorPoint
from simindex.log import setup_logger
from simindex.metrics import compute_recall_at_k
from simindex.validation import GraphValidator


def main():
    print("="*60)
    print("simindex Quick Start")
    print("="*60)

    setup_logger(level="WARNING")

    # Step 1: Create synthetic dataset
    print("\n1. Creating dataset...")
    rng = np.random.default_rng(42)

    # 1000 points, 64 dimensions
    points = [(i, VectorPoint(v)) for i, v in enumerate(rng.standard_normal((1000, 64)))]
    print(f"   Created {len(points)} points of dimension {len(points[0][1])}")

    # Step 2: Build both indices
    print("\n2. Building indices...")

    exact = NaiveIndex()
    approx = HNSWIndex(M=16, construction_expansion_factor=100, ef_search=64, seed=0)
    for index in (exact, approx):
        index.insert_many(points)

    stats = approx.stats()
    print(f"   Indexed {stats['size']} points")
    print(f"   Graph has {stats['max_level'] + 1} layers: {stats['nodes_per_level']}")
    print(f"   Graph valid: {GraphValidator(approx.graph).is_valid()}")

    # Step 3: Search
    print("\n3. Searching...")

    query = VectorPoint(rng.standard_normal(64))
    k = 10

    for rank, (key, distance) in enumerate(approx.search(query, k)[:5], 1):
        print(f"      {rank}. Point {key} (distance: {distance:.4f})")

    # Step 4: Compare against the exact answer
    print("\n4. Measuring recall...")

    queries = [VectorPoint(v) for v in rng.standard_normal((50, 64))]
    recalls = [
        compute_recall_at_k(approx.find_keys(q, k), exact.find_keys(q, k), k=k)
        for q in queries
    ]
    print(f"   Mean recall@{k}: {np.mean(recalls):.3f}")


if __name__ == "__main__":
    main()
