"""
Experiments for the Warnsdorff Knight's Tour

This script measures how well the greedy rule does across board sizes:
1. Success rate over all start squares for every board from 3x3 to 10x10
2. Comparison with the known existence of open tours
3. Per-start-square move counts for a few reference boards
"""

import numpy as np
import matplotlib.pyplot as plt
import os
import time

from knight_tour.solver import sweep_start_squares
from knight_tour.utils import check_tour_exists
from knight_tour.visualize import plot_success_heatmap


def experiment_1_success_rates(min_size=3, max_size=10):
    """
    Task 1: Fraction of start squares giving a full tour, per board size.
    """
    print(f"\n{'='*60}")
    print(f"Experiment 1: Success Rates ({min_size}x{min_size} to {max_size}x{max_size})")
    print(f"{'='*60}")

    sizes = list(range(min_size, max_size + 1))
    rates = np.zeros((len(sizes), len(sizes)))

    for i, rows in enumerate(sizes):
        for j, cols in enumerate(sizes):
            start = time.time()
            counts = sweep_start_squares(rows, cols)
            rates[i, j] = np.mean(counts == rows * cols - 1)
            print(f"  {rows:>2}x{cols:<2}: success={rates[i, j]:>6.1%} "
                  f"({time.time() - start:.2f}s)")

    plt.figure(figsize=(9, 7))
    plt.imshow(rates, cmap='RdYlGn', vmin=0, vmax=1, origin='lower')
    plt.colorbar(label='Success rate')
    plt.xticks(range(len(sizes)), sizes)
    plt.yticks(range(len(sizes)), sizes)
    plt.xlabel('Columns', fontsize=12)
    plt.ylabel('Rows', fontsize=12)
    plt.title("Warnsdorff Success Rate over All Start Squares", fontsize=13, fontweight='bold')
    for i in range(len(sizes)):
        for j in range(len(sizes)):
            plt.text(j, i, f"{rates[i, j]:.0%}", ha='center', va='center', fontsize=7)
    plt.tight_layout()
    plt.savefig('results/experiment1_success_rates.png', dpi=150)
    plt.close()

    return sizes, rates


def experiment_2_existence(sizes, rates):
    """
    Task 2: Boards where a tour exists but the heuristic never finds one.
    """
    print(f"\n{'='*60}")
    print("Experiment 2: Heuristic vs Existence")
    print(f"{'='*60}")

    missed = []
    for i, rows in enumerate(sizes):
        for j, cols in enumerate(sizes):
            info = check_tour_exists(rows, cols)
            if info['exists'] and rates[i, j] == 0:
                missed.append((rows, cols))
            if not info['exists'] and rates[i, j] > 0:
                print(f"  WARNING: {rows}x{cols} toured but no tour should exist")

    if missed:
        print(f"  Tours exist but never found: {', '.join(f'{r}x{c}' for r, c in missed)}")
    else:
        print("  Every board with a tour is toured from at least one start square")

    return missed


def experiment_3_reference_boards(boards=((3, 4), (5, 5), (8, 8))):
    """
    Task 3: Move counts from every start square on a few reference boards.
    """
    print(f"\n{'='*60}")
    print("Experiment 3: Reference Boards")
    print(f"{'='*60}")

    for rows, cols in boards:
        counts = sweep_start_squares(rows, cols)
        target = rows * cols - 1
        print(f"\n{rows}x{cols} (target {target} moves):")
        for row in counts:
            print("  " + " ".join(f"{int(v):>3}" for v in row))
        plot_success_heatmap(counts, filename=f'results/experiment3_{rows}x{cols}.png')


if __name__ == "__main__":
    os.makedirs('results', exist_ok=True)

    sizes, rates = experiment_1_success_rates()
    experiment_2_existence(sizes, rates)
    experiment_3_reference_boards()

    print(f"\n{'='*60}")
    print("All experiments completed. Results saved to results/")
    print(f"{'='*60}")
