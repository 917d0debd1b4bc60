"""Row-based packing of upper-triangular matrices.

Entries are stored row by row, each row starting at its diagonal: row 0
contributes K entries, row 1 contributes K-1, ..., row K-1 one entry. This
is the order in which the Cholesky block of a Gaussian parameter vector is
laid out.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymixl.backend._array_api import array_namespace
from pymixl.utils._validation import ContractViolation


def triangular_dim(n_entries: int) -> int:
    """Return K such that K*(K+1)//2 == n_entries.

    Raises
    ------
    ContractViolation
        If ``n_entries`` is not a triangular number.
    """
    # Solve K*(K+1)/2 = n for K: K = (-1 + sqrt(1 + 8n)) / 2
    K = int(round((-1.0 + np.sqrt(1.0 + 8.0 * n_entries)) / 2.0))
    if K * (K + 1) // 2 != n_entries:
        raise ContractViolation(
            f"Input length {n_entries} is not a triangular number"
        )
    return K


def vectriu(U: NDArray, *, xp=None) -> NDArray:
    """Extract upper triangular elements (including diagonal) row-by-row.

    Parameters
    ----------
    U : ndarray, shape (K, K)
        Square matrix; entries below the diagonal are ignored.
    xp : backend, optional

    Returns
    -------
    w : ndarray, shape (K*(K+1)//2,)

    Examples
    --------
    >>> vectriu(np.array([[3., 4.], [0., 5.]]))
    array([3., 4., 5.])
    """
    if xp is None:
        xp = array_namespace(U)
    U = xp.array(U, dtype=xp.float64)
    if len(U.shape) != 2 or U.shape[0] != U.shape[1]:
        raise ContractViolation(f"U must be square, got shape {tuple(U.shape)}")
    K = U.shape[0]
    w = xp.zeros((K * (K + 1) // 2,), dtype=xp.float64)
    idx = 0
    for i in range(K):
        for j in range(i, K):
            w[idx] = U[i, j]
            idx += 1
    return w


def mattriu(v: NDArray, *, xp=None) -> NDArray:
    """Expand row-packed upper triangular entries into a K x K matrix.

    Inverse of vectriu; the strictly lower part of the result is zero.

    Examples
    --------
    >>> mattriu(np.array([3., 4., 5.]))
    array([[3., 4.],
           [0., 5.]])
    """
    if xp is None:
        xp = array_namespace(v)
    v = xp.array(v, dtype=xp.float64)
    K = triangular_dim(len(v))

    U = xp.zeros((K, K), dtype=xp.float64)
    idx = 0
    for i in range(K):
        for j in range(i, K):
            U[i, j] = v[idx]
            idx += 1
    return U
