from renderer import SATArtRenderer
from sat_sentence import SATSentence
import time
import numpy as np

def run_benchmark():
    print(f"{'Instance Type':<20} | {'Vars':<5} | {'Clauses':<8} | {'Workers':<7} | {'SAT px':<8} | {'Time (ms)':<10}")
    print("-" * 75)

    configs = [
        ("Random 10-SAT", 10, 4.26),
        ("Random 14-SAT", 14, 4.26),
        ("Random 18-SAT", 18, 4.26),
        ("Random 20-SAT", 20, 4.26)
    ]

    for name, n, ratio in configs:
        num_clauses = int(n * ratio)
        sentence = SATSentence.random_ksat(num_clauses, n, seed=f"bench-{n}", k=3)

        for workers in (1, 4):
            renderer = SATArtRenderer(sentence, beta=0.5, max_workers=workers)

            start_time = time.time()
            pixels = renderer.render()
            end_time = time.time()

            # satisfying assignments are drawn in the full sat color
            n_sat = int(np.count_nonzero(np.all(pixels == renderer.sat_color, axis=-1)))

            print(f"{name:<20} | {n:<5} | {num_clauses:<8} | {workers:<7} | {n_sat:<8} | {(end_time - start_time) * 1000:<10.2f}")

if __name__ == "__main__":
    run_benchmark()
