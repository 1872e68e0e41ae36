"""Exact linear algebra over a coefficient ring.

Matrices are numpy object arrays so that entries keep their exact Python
types (int, Fraction, galois scalars); all arithmetic goes through the ring
object rather than numpy's elementwise operators.

Two operations are needed by the minimal polynomial search:

- solve_linear_system: Gauss-Jordan elimination over a field.
- charpoly: the characteristic polynomial det(X*I - M) via Berkowitz'
  algorithm, which is division-free and therefore works over any
  commutative ring (ZZ, ZZ/nZ, ...).
"""

from typing import Any, List, Optional, Sequence

import numpy as np

from primitives.ring import Ring


def matrix(ring: Ring, rows: Sequence[Sequence[Any]]) -> np.ndarray:
    """Build an object-dtype matrix, coercing int entries into `ring`."""
    n_rows = len(rows)
    n_cols = len(rows[0]) if n_rows else 0
    out = np.empty((n_rows, n_cols), dtype=object)
    for i, row in enumerate(rows):
        if len(row) != n_cols:
            raise ValueError(f"Row {i} has {len(row)} entries, expected {n_cols}")
        for j, v in enumerate(row):
            out[i, j] = ring.coerce(v) if isinstance(v, int) and not isinstance(v, bool) else v
    return out


def identity(ring: Ring, n: int) -> np.ndarray:
    out = np.empty((n, n), dtype=object)
    for i in range(n):
        for j in range(n):
            out[i, j] = ring.one if i == j else ring.zero
    return out


def matmul(ring: Ring, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Product of object matrices using ring arithmetic."""
    if a.shape[1] != b.shape[0]:
        raise ValueError(f"Shape mismatch: {a.shape} @ {b.shape}")
    out = np.empty((a.shape[0], b.shape[1]), dtype=object)
    for i in range(a.shape[0]):
        for j in range(b.shape[1]):
            acc = ring.zero
            for k in range(a.shape[1]):
                acc = ring.add(acc, ring.mul(a[i, k], b[k, j]))
            out[i, j] = acc
    return out


def solve_linear_system(
    field: Ring,
    columns: Sequence[Sequence[Any]],
    rhs: Sequence[Any],
) -> Optional[List[Any]]:
    """Solve sum_j c_j * columns[j] = rhs over a field.

    Args:
        field: Coefficient field (must have is_field set)
        columns: Column vectors, each of length len(rhs)
        rhs: Right-hand side vector

    Returns:
        One solution [c_0, ..., c_{k-1}] (free variables set to zero), or None
        when the system is inconsistent. The solution is unique exactly when
        the columns are linearly independent.
    """
    if not field.is_field:
        raise ValueError(f"solve_linear_system requires a field, got {field}")
    n_rows = len(rhs)
    n_cols = len(columns)

    # Augmented matrix [columns | rhs]
    aug = np.empty((n_rows, n_cols + 1), dtype=object)
    for i in range(n_rows):
        for j in range(n_cols):
            aug[i, j] = columns[j][i]
        aug[i, n_cols] = rhs[i]

    pivots = []
    row = 0
    for col in range(n_cols):
        if row >= n_rows:
            break
        pivot = None
        for r in range(row, n_rows):
            if not field.is_zero(aug[r, col]):
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            aug[[row, pivot]] = aug[[pivot, row]]
        inv = field.inverse(aug[row, col])
        for c in range(col, n_cols + 1):
            aug[row, c] = field.mul(inv, aug[row, c])
        for r in range(n_rows):
            if r == row or field.is_zero(aug[r, col]):
                continue
            factor = aug[r, col]
            for c in range(col, n_cols + 1):
                aug[r, c] = field.sub(aug[r, c], field.mul(factor, aug[row, c]))
        pivots.append(col)
        row += 1

    # Inconsistent: a zero row with non-zero right-hand side
    for r in range(row, n_rows):
        if not field.is_zero(aug[r, n_cols]):
            return None

    solution = [field.zero] * n_cols
    for r, col in enumerate(pivots):
        solution[col] = aug[r, n_cols]
    return solution


def charpoly(ring: Ring, m: np.ndarray) -> List[Any]:
    """Characteristic polynomial det(X*I - m), ascending coefficients.

    Berkowitz: charpoly(M) = T(M) * charpoly(A) where M = [[a, R], [C, A]] and
    T(M) is the lower-triangular Toeplitz matrix with first column
    [1, -a, -R*C, -R*A*C, -R*A^2*C, ...].

    Returns:
        [c_0, ..., c_{n-1}, 1] for an n x n matrix
    """
    n = m.shape[0]
    if m.shape != (n, n):
        raise ValueError(f"charpoly requires a square matrix, got {m.shape}")
    return _berkowitz(ring, m)[::-1]


def _berkowitz(ring: Ring, m: np.ndarray) -> List[Any]:
    """Descending coefficients [1, c_1, ..., c_n] of det(X*I - m)."""
    n = m.shape[0]
    if n == 0:
        return [ring.one]
    if n == 1:
        return [ring.one, ring.neg(m[0, 0])]

    a = m[0, 0]
    r_row = m[0:1, 1:]
    c_col = m[1:, 0:1]
    sub = m[1:, 1:]

    # diags = [1, -a, -R C, -R A C, ..., -R A^(n-2) C]
    diags = [ring.one, ring.neg(a)]
    v = c_col
    for i in range(n - 1):
        if i > 0:
            v = matmul(ring, sub, v)
        diags.append(ring.neg(matmul(ring, r_row, v)[0, 0]))

    inner = _berkowitz(ring, sub)
    out = []
    for i in range(n + 1):
        acc = ring.zero
        for j in range(min(i + 1, n)):
            acc = ring.add(acc, ring.mul(diags[i - j], inner[j]))
        out.append(acc)
    return out
