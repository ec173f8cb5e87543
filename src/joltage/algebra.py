from __future__ import annotations

import itertools
from fractions import Fraction
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .rational import inv, is_zero


def build_A(buttons: Sequence[Sequence[int]], m: int) -> np.ndarray:
    """Return the m x n incidence matrix of a machine.
    Column i encodes the counters incremented when pressing button i.
    """
    n = len(buttons)
    A = np.zeros((m, n), dtype=np.uint8)
    for i, button in enumerate(buttons):
        for j in button:
            if not 0 <= j < m:
                raise ValueError(
                    f"Button {i} references counter {j}, expected 0..{m - 1}"
                )
            A[j, i] = 1  # repeated indices are idempotent
    return A


def build_augmented(
    buttons: Sequence[Sequence[int]], targets: Sequence[int]
) -> np.ndarray:
    """Return the augmented matrix [A|b] as an object array of Fractions."""
    if any(t < 0 for t in targets):
        raise ValueError(f"Targets must be non-negative, got {list(targets)}")
    m = len(targets)
    A = build_A(buttons, m)
    n = A.shape[1]

    M = np.empty((m, n + 1), dtype=object)
    for j in range(m):
        for i in range(n):
            M[j, i] = Fraction(int(A[j, i]))
        M[j, n] = Fraction(int(targets[j]))
    return M


def rref_augmented(M: np.ndarray) -> Tuple[np.ndarray, list[int]]:
    """Return RREF of augmented matrix [A|b] over Q and list of pivot columns.

    Pivots are searched in coefficient columns only: for each row, the
    leftmost column with a non-zero entry at or below that row wins, and
    within the column the topmost such row.
    """
    R = np.array(M, dtype=object, copy=True)
    m, width = R.shape
    n = width - 1

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        pivot = None
        for r in range(row, m):
            if not is_zero(R[r, col]):
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            R[[row, pivot]] = R[[pivot, row]]

        R[row, :] = R[row, :] * inv(R[row, col])

        # Gauss-Jordan: clear the pivot column above and below
        for r in range(m):
            if r != row and not is_zero(R[r, col]):
                factor = R[r, col]
                R[r, :] = R[r, :] - R[row, :] * factor
        pivcols.append(col)
        row += 1
    return R, pivcols


def free_columns(pivcols: Sequence[int], n: int) -> list[int]:
    pivots = set(pivcols)
    return [j for j in range(n) if j not in pivots]


def is_inconsistent(R: np.ndarray, n: int) -> bool:
    """True if some row reads 0 = c with c != 0."""
    for row in R:
        if all(is_zero(x) for x in row[:n]) and not is_zero(row[n]):
            return True
    return False


# --- indicator lights: the same system over GF(2) ---


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Return RREF of [A|b] over GF(2) and its pivot columns."""
    M = np.concatenate(
        [A % 2, np.asarray(b).reshape(-1, 1) % 2], axis=1
    ).astype(np.uint8)
    m, n = A.shape

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        nonzero = np.flatnonzero(M[row:, col])
        if len(nonzero) == 0:
            continue
        pivot = row + int(nonzero[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        for r in np.flatnonzero(M[:, col]):
            if r != row:
                M[r, :] ^= M[row, :]
        pivcols.append(col)
        row += 1
    return M, pivcols


def gf2_solve_with_nullspace(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], List[np.ndarray], bool]:
    """Solve A x = b over GF(2).

    Returns:
        x0: particular solution with every free variable at 0, or None
        basis: nullspace vectors, one per free column
        solvable: bool
    """
    n = A.shape[1]
    R, pivcols = gf2_rref_augmented(A, b)
    if np.any(~R[:, :n].any(axis=1) & (R[:, n] == 1)):
        return None, [], False

    x0 = np.zeros((n,), dtype=np.uint8)
    for ri, pc in enumerate(pivcols):
        x0[pc] = R[ri, n]

    basis: list[np.ndarray] = []
    for f in free_columns(pivcols, n):
        v = np.zeros((n,), dtype=np.uint8)
        v[f] = 1
        # in RREF each pivot row mentions f at most through its own entry
        for ri, pc in enumerate(pivcols):
            v[pc] = R[ri, f]
        basis.append(v)
    return x0, basis, True


def gf2_min_weight_solution(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Return the minimum-Hamming-weight solution to A x = b (if solvable)."""
    x0, basis, ok = gf2_solve_with_nullspace(A, b)
    if not ok or x0 is None:
        return None, False
    best = x0
    best_w = int(x0.sum())
    for mask in itertools.product((0, 1), repeat=len(basis)):
        cand = x0.copy()
        for bit, v in zip(mask, basis):
            if bit:
                cand ^= v
        w = int(cand.sum())
        if w < best_w:
            best, best_w = cand, w
    return best, True
