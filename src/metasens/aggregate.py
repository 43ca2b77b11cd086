"""Turn per-experiment results into convergence and dimensionality tables."""

import numpy as np
import pandas as pd


def collect(frame, results, threshold=0.05):
    """Attach run outputs to the grid frame.

    results: {row_id: RunResult}. Adds columns output, sum_si,
    mean_dimension (sum of total-order indices) and kt (number of inputs
    whose total-order index exceeds ``threshold``). Rows missing from
    ``results`` keep NaN.
    """
    columns = ["output", "sum_si", "mean_dimension", "kt"]
    records = {}
    for row_id, res in results.items():
        ti = res.indices.total_order().to_numpy()
        records[row_id] = [res.output, res.indices.si_sum, res.indices.ti_sum,
                           float(np.sum(ti > threshold))]
    stats = pd.DataFrame.from_dict(records, orient="index", columns=columns, dtype=float)
    stats = stats.reindex(frame.index)
    return pd.concat([frame, stats], axis=1)


def failure_table(rows, errors):
    """One line per failed experiment: its fields, the error type and message."""
    records = []
    for row_id, exc in errors.items():
        rec = {"row_id": row_id}
        rec.update(rows[row_id].as_dict())
        rec["error"] = type(exc).__name__
        rec["message"] = str(exc)
        records.append(rec)
    columns = ["row_id", "k", "seed", "order", "phi", "model_runs", "sample_method",
               "matrices", "error", "message"]
    return pd.DataFrame(records, columns=columns).set_index("row_id")


def convergence(table):
    """RMSE of the mean output against the largest sample size.

    Every completed row is paired with the row of the same design point and
    sampling method at the largest ``model_runs``; the RMSE is taken per
    (model_runs, sample_method).
    """
    done = table.dropna(subset=["output"])
    largest = table["model_runs"].max()
    benchmark = (done.loc[done["model_runs"] == largest, ["design_id", "sample_method", "output"]]
                 .rename(columns={"output": "y_highest"}))
    merged = done.merge(benchmark, on=["design_id", "sample_method"], how="inner")
    merged["sq_error"] = (merged["y_highest"] - merged["output"]) ** 2
    rmse = (merged.groupby(["model_runs", "sample_method"])["sq_error"]
            .mean()
            .pow(0.5)
            .rename("RMSE")
            .reset_index())
    return rmse


def dimensions(table):
    """Rows at the largest sample size with their index sums and kt."""
    largest = table["model_runs"].max()
    cols = ["design_id", "k", "seed", "order", "phi", "model_runs", "sample_method",
            "sum_si", "kt", "mean_dimension"]
    return table.loc[table["model_runs"] == largest, cols].copy()


def index_anomalies(dims):
    """Count finite-sample artefacts in the index sums (recorded, not errors)."""
    sum_si = dims["sum_si"]
    return {
        "rows": int(len(dims)),
        "missing": int(sum_si.isna().sum()),
        "negative_sum_si": int((sum_si < 0).sum()),
        "sum_si_above_one": int((sum_si > 1).sum()),
    }
