from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "200", "--height", "200"]


@dataclass
class Example:
    name: str
    args: list[str]
    output: Path

    def full_args(self) -> list[str]:
        return ["python", "render.py", *self.args, "--output", str(self.output)]


def _example(name: str, filename: str, *args: str) -> Example:
    return Example(name=name, args=[*BASE_ARGS, *args], output=EXAMPLES_ROOT / name / filename)


EXAMPLES: list[Example] = [
    _example("defaults", "reference.png"),
    _example("max-iterations", "high-iterations.png", "--max-iterations", "500"),
    _example("width", "wide.png", "--width", "320"),
    _example("height", "short.png", "--height", "120"),
    _example("center", "seahorse-valley.png", "--center-re", "-0.75", "--center-im", "0.1", "--zoom", "8"),
    _example("zoom", "zoomed.png", "--zoom", "2.5"),
    _example("bounds", "classic-window.png", "--bounds", "-2.0", "1.0", "-1.5", "1.5"),
    _example(
        "layer",
        "two-layers.png",
        "--layer", "root=2:1,0.6,0:2",
        "--layer", "modulo=16:0,0.4,1:1",
    ),
    _example("mono-linear", "linear.png", "--mono", "linear"),
    _example("mono-root", "root.png", "--mono", "root=4"),
    _example("mono-modulo", "modulo.png", "--mono", "modulo=12"),
    _example("format", "reference.jpg", "--format", "jpg"),
    _example("verbose", "diagnostic.png", "--verbose"),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    _ensure_clean([example.output.parent])
    example.output.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    if not example.output.is_file():
        raise RuntimeError(f"Expected file {example.output} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
