from __future__ import annotations

import re
from pathlib import Path

_LIGHTS_RE = re.compile(r"\[([.#]+)\]")
_BUTTON_RE = re.compile(r"\(([0-9,\s]*)\)")
_TARGETS_RE = re.compile(r"\{([0-9,\s]+)\}")


class Machine:
    def __init__(
        self,
        lights: list[bool],
        buttons: list[list[int]],
        targets: list[int],
    ):
        self.lights = list(lights)
        self.buttons = [list(b) for b in buttons]
        self.targets = list(targets)

    @property
    def n_buttons(self) -> int:
        return len(self.buttons)

    @property
    def n_counters(self) -> int:
        return len(self.targets)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return (
            self.lights == other.lights
            and self.buttons == other.buttons
            and self.targets == other.targets
        )

    def __repr__(self):
        return (
            f"Machine(buttons={self.n_buttons}, counters={self.n_counters}, "
            f"lights_on={sum(self.lights)})"
        )

    def __str__(self) -> str:
        diagram = "".join("#" if on else "." for on in self.lights)
        wiring = " ".join(
            "(" + ",".join(str(j) for j in b) + ")" for b in self.buttons
        )
        joltage = ",".join(str(t) for t in self.targets)
        return f"[{diagram}] {wiring} {{{joltage}}}"


def _ints(text: str) -> list[int]:
    return [int(tok) for tok in text.split(",") if tok.strip()]


def parse_machine(line: str) -> Machine:
    """Parse one line like ``[.##.] (3) (1,3) (2) {3,5,4,7}``."""
    lights_match = _LIGHTS_RE.search(line)
    targets_match = _TARGETS_RE.search(line)
    if lights_match is None or targets_match is None:
        raise ValueError(f"Malformed machine line: {line!r}")

    lights = [ch == "#" for ch in lights_match.group(1)]
    buttons = [_ints(m.group(1)) for m in _BUTTON_RE.finditer(line)]
    targets = _ints(targets_match.group(1))
    return Machine(lights, buttons, targets)


def parse_machines(text: str) -> list[Machine]:
    return [
        parse_machine(line) for line in text.splitlines() if line.strip()
    ]


def load_machines(path: str | Path) -> list[Machine]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_machines(f.read())
