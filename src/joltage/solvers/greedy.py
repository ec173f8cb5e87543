from __future__ import annotations

from typing import Optional, Sequence


class GreedySolver:
    """Press the button that can be pressed the most times, repeatedly.

    Fast but neither optimal nor complete: returns None when no button can
    make progress while some counter is still short of its target.
    """

    name = "greedy"

    def solve(
        self, buttons: Sequence[Sequence[int]], targets: Sequence[int]
    ) -> Optional[int]:
        remaining = list(targets)
        wirings = [sorted(set(b)) for b in buttons]
        total = 0

        while any(remaining):
            best = None
            best_score = 0
            for counters in wirings:
                if not counters:
                    continue
                presses = min(remaining[j] for j in counters)
                score = presses * len(counters)
                if presses > 0 and score > best_score:
                    best, best_score = (counters, presses), score
            if best is None:
                return None

            counters, presses = best
            for j in counters:
                remaining[j] -= presses
            total += presses
        return total
