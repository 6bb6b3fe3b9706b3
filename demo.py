from renderer import SATArtRenderer, save_image
from sat_sentence import SATSentence
from gray_code import to_gray

def run_demo():
    print("================================================================================")
    print("DEMO 1: Easy Instance with Forced Assignments")
    print("================================================================================")

    # 5 variables, 7 clauses
    # 1: (x1)
    # 2: (¬x2 ∨ x3)
    # 3: (x2)
    # 4: (¬x3 ∨ x4)
    # 5: (x3)
    # 6: (¬x4 ∨ x5)
    # 7: (x4)
    # The only satisfying assignment is x1..x5 all true.
    clauses = [
        [1],
        [-2, 3],
        [2],
        [-3, 4],
        [3],
        [-4, 5],
        [4]
    ]

    sentence = SATSentence(clauses)
    renderer = SATArtRenderer(sentence, beta=0.5)

    print(f"Sentence: {sentence}")
    print(f"Instance: {sentence.num_variables()} variables, {sentence.num_clauses} clauses")
    print(f"Image: {renderer.width}x{renderer.height} (Hilbert order {renderer.order})")
    print()
    print(f"{'Index':<6} | {'Assignment':<10} | {'Pixel':<8} | {'Unsat':<5} | {'Color'}")
    print("-" * 55)

    n = renderer.n_variables
    for i in range(renderer.num_pixels):
        x, y, color = renderer.render_pixel(i)
        assignment = to_gray(i)
        unsat = sentence.n_unsatisfied_clauses(assignment, n)
        # variable v lives in bit v % n, print x1 first
        bits = "".join(str((assignment >> (v % n)) & 1) for v in range(1, n + 1))
        status = "  <- SATISFIED" if unsat == 0 else ""
        print(f"{i:<6} | {bits:<10} | {f'({x},{y})':<8} | {unsat:<5} | {color}{status}")

    pixels = renderer.render()
    save_image(pixels, "demo.png")
    print("\nImage written to demo.png")

if __name__ == "__main__":
    run_demo()
