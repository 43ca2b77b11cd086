import os

import numpy as np
import matplotlib.pyplot as plt

from .utils import ensure_outdir


def _save(fig, out_path):
    ensure_outdir(out_path)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def plot_convergence(rmse, out_path):
    """RMSE of the mean output against the number of model runs, one line per method."""
    fig, ax = plt.subplots(figsize=(5, 4))
    for method, group in rmse.groupby("sample_method"):
        group = group.sort_values("model_runs")
        ax.plot(group["model_runs"], group["RMSE"], marker="o", label=method)
    ax.set_xscale("log")
    ax.set_xlabel("Nº of model runs")
    ax.set_ylabel("RMSE")
    ax.legend(title="Sampling method", frameon=False)
    _save(fig, out_path)


def plot_sum_si_histogram(dims, out_path, bins=30):
    values = dims["sum_si"].to_numpy(dtype=float)
    values = values[np.isfinite(values)]
    fig, ax = plt.subplots(figsize=(5, 4))
    ax.hist(values, bins=bins, range=(0, 1), color="white", edgecolor="black")
    ax.set_xlim(0, 1)
    ax.set_xlabel(r"$\sum_{i=1}^{k} S_i$")
    ax.set_ylabel("Counts")
    _save(fig, out_path)


def plot_kt_scatter(dims, out_path):
    """Sum of first-order indices against k_t, coloured by the number of inputs."""
    fig, ax = plt.subplots(figsize=(5, 4))
    sc = ax.scatter(dims["sum_si"], dims["kt"], c=dims["k"], cmap="RdYlGn", s=6)
    fig.colorbar(sc, ax=ax, label="$k$")
    ax.set_xlim(0, 1)
    ax.set_xlabel(r"$\sum_{i=1}^{k} S_i$")
    ax.set_ylabel("$k_t$")
    _save(fig, out_path)


def plot_mean_dimension(dims, out_path):
    fig, ax = plt.subplots(figsize=(5, 4))
    ax.scatter(dims["mean_dimension"], dims["sum_si"], s=6, alpha=0.5, color="black")
    ax.set_xlabel(r"$\sum_{i=1}^{k} T_i$")
    ax.set_ylabel(r"$\sum_{i=1}^{k} S_i$")
    _save(fig, out_path)


def plot_all(rmse, dims, out_dir):
    paths = {
        "convergence": os.path.join(out_dir, "convergence.png"),
        "sum_si": os.path.join(out_dir, "sum_si_histogram.png"),
        "kt": os.path.join(out_dir, "sum_si_kt.png"),
        "mean_dimension": os.path.join(out_dir, "mean_dimension.png"),
    }
    plot_convergence(rmse, paths["convergence"])
    plot_sum_si_histogram(dims, paths["sum_si"])
    plot_kt_scatter(dims, paths["kt"])
    plot_mean_dimension(dims, paths["mean_dimension"])
    return paths
