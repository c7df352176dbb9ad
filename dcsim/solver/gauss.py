from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from ..errors import SingularSystem

Array = np.ndarray


@dataclass
class GaussConfig:
    """
    Configuration parameters for the Gaussian elimination solver.

    Attributes:
        pivot_tol: Relative pivot tolerance. A pivot whose magnitude is at or
            below ``pivot_tol`` times the largest entry of its column in the
            original matrix is treated as zero (default: 1e-12).
    """
    pivot_tol: float = 1e-12


def gaussian_elimination(A: Array, b: Array, cfg: GaussConfig | None = None) -> Array:
    """
    Solve ``A x = b`` by Gaussian elimination with partial pivoting followed
    by back substitution.

    For each column the row with the largest magnitude at or below the
    diagonal becomes the pivot row (the first one on ties) and is swapped
    into place in both ``A`` and ``b``. Rows below are then reduced with the
    same factor applied to ``b``.

    Args:
        A: Square coefficient matrix (n x n). Not modified.
        b: Right-hand side vector (n). Not modified.
        cfg: GaussConfig with the pivot tolerance.

    Returns:
        Solution vector x of length n, in the column order of ``A``.

    Raises:
        SingularSystem: A pivot vanished or the result is not finite.
            ``column`` holds the offending column when one is known.
    """
    cfg = cfg or GaussConfig()
    A = np.array(A, dtype=float)
    b = np.array(b, dtype=float)
    n = b.shape[0]
    if A.shape != (n, n):
        raise ValueError(f"Matrix shape {A.shape} does not match vector length {n}.")
    if n == 0:
        return np.zeros(0)

    # Scale of each column in the original matrix.
    thresholds = cfg.pivot_tol * np.max(np.abs(A), axis=0)

    for i in range(n):
        p = i + int(np.argmax(np.abs(A[i:, i])))
        if abs(A[p, i]) <= thresholds[i]:
            raise SingularSystem(f"Zero pivot in column {i}.", column=i)
        if p != i:
            A[[i, p]] = A[[p, i]]
            b[[i, p]] = b[[p, i]]

        factors = A[i + 1:, i] / A[i, i]
        A[i + 1:, i:] -= np.outer(factors, A[i, i:])
        b[i + 1:] -= factors * b[i]

    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        x[i] = (b[i] - A[i, i + 1:] @ x[i + 1:]) / A[i, i]

    if not np.all(np.isfinite(x)):
        bad = int(np.flatnonzero(~np.isfinite(x))[0])
        raise SingularSystem(f"Non-finite value in column {bad}.", column=bad)
    return x
