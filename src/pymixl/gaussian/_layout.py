"""Parameter layout of the Gaussian mixing distribution.

A parameter vector for K random coefficients has K*(K+3)/2 entries: the K
means, followed by the K*(K+1)/2 entries of the upper-triangular Cholesky
factor, stored row by row starting at the diagonal.

The layout tables encode the sparsity of d beta / d theta. Factor entry
U[r, c] only moves coordinate r of beta, so every Cholesky parameter has a
single nonzero Jacobian column ``nonzero_column_indices[p] = r``;
``start_indices[p]`` is the parameter index where factor row r begins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from pymixl.utils._validation import check_n_attributes


def count_params(n_attributes: int) -> int:
    """Number of distribution parameters, K*(K+3)/2."""
    return n_attributes * (n_attributes + 3) // 2


def count_cholesky_entries(n_attributes: int) -> int:
    """Number of free entries of the K x K upper-triangular factor, K*(K+1)/2."""
    return n_attributes * (n_attributes + 1) // 2


def iter_cholesky_slots(n_attributes: int) -> Iterator[tuple[int, int, int]]:
    """Walk the factor slots in row-major order.

    Yields
    ------
    (i, row, row_start) : tuple of int
        Slot ``i`` (parameter ``K + i``) lies in factor row ``row``, whose
        first slot is ``row_start``; its factor column is
        ``row + i - row_start``.
    """
    limit = n_attributes
    add = n_attributes - 1
    row = 0
    row_start = 0
    for i in range(count_cholesky_entries(n_attributes)):
        if i == limit:
            limit += add
            add -= 1
            row += 1
            row_start = i
        yield i, row, row_start


@dataclass(frozen=True, eq=False)
class ParameterLayout:
    """Index tables mapping parameters to factor positions.

    Attributes
    ----------
    n_attributes : int
        K, the number of random coefficients.
    n_params : int
        K*(K+3)/2.
    n_cholesky_entries : int
        K*(K+1)/2.
    nonzero_column_indices : NDArray, shape (n_params,)
        For p >= K, the beta coordinate (factor row) parameter p moves.
    start_indices : NDArray, shape (n_params,)
        For p >= K, the parameter index where that factor row begins.

    Entries below K of both tables are zero and carry no meaning.
    """

    n_attributes: int
    n_params: int
    n_cholesky_entries: int
    nonzero_column_indices: NDArray
    start_indices: NDArray

    def factor_position(self, param_index: int) -> tuple[int, int]:
        """Return the (row, col) of the factor entry held by ``param_index`` >= K."""
        row = int(self.nonzero_column_indices[param_index])
        return row, row + param_index - int(self.start_indices[param_index])


def build_layout(n_attributes: int) -> ParameterLayout:
    """Build the parameter layout for ``n_attributes`` random coefficients."""
    K = check_n_attributes(n_attributes)
    n_params = count_params(K)

    nonzero_column_indices = np.zeros(n_params, dtype=np.int64)
    start_indices = np.zeros(n_params, dtype=np.int64)
    for i, row, row_start in iter_cholesky_slots(K):
        nonzero_column_indices[K + i] = row
        start_indices[K + i] = K + row_start

    return ParameterLayout(
        n_attributes=K,
        n_params=n_params,
        n_cholesky_entries=count_cholesky_entries(K),
        nonzero_column_indices=nonzero_column_indices,
        start_indices=start_indices,
    )
