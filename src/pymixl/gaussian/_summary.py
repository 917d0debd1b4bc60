"""Labelled views of a parameter vector for reporting."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pymixl.gaussian._context import DistributionContext, as_vector
from pymixl.utils._validation import ContractViolation


def parameter_table(
    context: DistributionContext,
    parameters: NDArray,
    attribute_names: Sequence[str] | None = None,
) -> pd.DataFrame:
    """One row per parameter: name, block, factor position and value.

    Parameters
    ----------
    context : DistributionContext
    parameters : ndarray, shape (n_params,)
    attribute_names : sequence of str or None
        Names of the K random coefficients. Defaults to "x0", "x1", ...

    Returns
    -------
    table : pd.DataFrame
        Columns ``name``, ``block`` ("mean" or "cholesky"), ``row``,
        ``col`` (nullable; the factor position, the attribute index for
        means with ``col`` missing) and ``value``.
    """
    K = context.n_attributes
    if attribute_names is None:
        attribute_names = [f"x{j}" for j in range(K)]
    attribute_names = list(attribute_names)
    if len(attribute_names) != K:
        raise ContractViolation(
            f"parameter_table: expected {K} attribute names, got {len(attribute_names)}"
        )

    theta = np.asarray(
        context.xp.to_numpy(
            as_vector(parameters, context.n_params, "parameters", context, "parameter_table")
        ),
        dtype=np.float64,
    )

    records = []
    for j in range(K):
        records.append({
            "name": f"mean_{attribute_names[j]}",
            "block": "mean",
            "row": j,
            "col": pd.NA,
            "value": theta[j],
        })
    for p in range(K, context.n_params):
        row, col = context.layout.factor_position(p)
        records.append({
            "name": f"chol_{attribute_names[row]}_{attribute_names[col]}",
            "block": "cholesky",
            "row": row,
            "col": col,
            "value": theta[p],
        })

    table = pd.DataFrame.from_records(records)
    table["row"] = table["row"].astype("Int64")
    table["col"] = table["col"].astype("Int64")
    return table
