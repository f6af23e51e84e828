import random
from typing import Dict, List, Optional, Tuple

from balancing_scale.balancer import balance
from balancing_scale.cli import format_result
from balancing_scale.models import Mass, PanContent, Scale, ScaleRef, ScaleTree

MAX_SCALES = 20
PREVIEW_LINES = 5


class _PendingScale:
    def __init__(self, name: str):
        self.name = name
        self.left: Optional[PanContent] = None
        self.right: Optional[PanContent] = None


def generate_random_tree(num_scales: int, rng: Optional[random.Random] = None) -> ScaleTree:
    """Generate a random valid scale tree with the specified number of scales"""
    if num_scales < 1:
        raise ValueError("Number of scales must be at least 1")
    rng = rng or random.Random()

    pending = [_PendingScale(f"S{i+1}") for i in range(num_scales)]

    # Hang every new scale on a free pan of an earlier one (no cycles, one parent)
    for i in range(1, num_scales):
        child = pending[i]
        parent = rng.choice([p for p in pending[:i] if p.left is None or p.right is None])
        if parent.left is None and (parent.right is not None or rng.random() < 0.7):  # 70% chance left
            parent.left = ScaleRef(child.name)
        else:
            parent.right = ScaleRef(child.name)

    # Add random masses (1-10kg) to empty pans, the rest stay empty
    scales: Dict[str, Scale] = {}
    for p in pending:
        left = p.left if p.left is not None else Mass(rng.randint(1, 10) if rng.random() < 0.8 else 0)
        right = p.right if p.right is not None else Mass(rng.randint(1, 10) if rng.random() < 0.8 else 0)
        scales[p.name] = Scale(p.name, left, right)

    return ScaleTree(scales, pending[0].name)


def _pan_token(pan: PanContent) -> str:
    return pan.name if isinstance(pan, ScaleRef) else str(pan.value)


def tree_to_lines(tree: ScaleTree) -> List[str]:
    """Format: ScaleName,LeftValue,RightValue"""
    return [f"{s.name},{_pan_token(s.left)},{_pan_token(s.right)}" for s in tree.values()]


def generate_test_case(num_scales: int, rng: Optional[random.Random] = None) -> Tuple[List[str], List[str]]:
    """Generate complete test case with input and expected output"""
    tree = generate_random_tree(num_scales, rng)
    return tree_to_lines(tree), format_result(balance(tree))


def write_test_files(base_name: str, input_lines: List[str], expected_lines: List[str]):
    """Write test case to input and expected output files"""
    with open(f"{base_name}_input.txt", "w") as f:
        f.write("\n".join(input_lines) + "\n")
    with open(f"{base_name}_expected.txt", "w") as f:
        f.write("\n".join(expected_lines) + "\n")
    print(f"\nGenerated test files: {base_name}_input.txt and {base_name}_expected.txt")


def prompt_scale_count(max_scales: int = MAX_SCALES) -> int:
    """Ask for a scale count until one in 1..max_scales is given"""
    while True:
        answer = input(f"Number of scales (1-{max_scales}): ").strip()
        try:
            num_scales = int(answer)
        except ValueError:
            print(f"Not a whole number: {answer!r}")
            continue
        if 1 <= num_scales <= max_scales:
            return num_scales
        print(f"Out of range: {num_scales}")


def _preview(title: str, lines: List[str]):
    print(f"\n{title}:")
    print("\n".join(lines[:PREVIEW_LINES]))
    if len(lines) > PREVIEW_LINES:
        print(f"... ({len(lines) - PREVIEW_LINES} more lines)")


def main(rng: Optional[random.Random] = None):
    print("=== Balancing Scale Test Case Generator ===")

    num_scales = prompt_scale_count()
    base_name = input("Test case name: ").strip() or f"scale{num_scales}"

    input_lines, expected_lines = generate_test_case(num_scales, rng)
    write_test_files(base_name, input_lines, expected_lines)

    _preview("Input", input_lines)
    _preview("Expected output", expected_lines)


if __name__ == "__main__":
    main()
