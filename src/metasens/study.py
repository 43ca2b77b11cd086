import json
import os

from .aggregate import convergence, dimensions, index_anomalies
from .grid import build_grid, run_grid
from .plotting import plot_all
from .utils import check_settings, ensure_outdir


def run_study(settings=None, out_dir="outputs", workers=None, do_plots=True):
    """Run the full experiment grid and write its reports to ``out_dir``.

    Writes convergence.csv, dimensions.csv, failures.csv (only when some
    experiment failed), summary.json and, unless ``do_plots`` is False, the
    figures. Returns (convergence, dimensions, failures) DataFrames.
    """
    settings = check_settings(settings or {})
    lo, hi = settings["exponents"]

    frame = build_grid(N=settings["N"], max_k=settings["max_k"],
                       exponents=range(lo, hi + 1),
                       sampling_methods=settings["sampling_methods"],
                       seed=settings["seed"])
    print(f"[INFO] Grid: {settings['N']} design points x {hi - lo + 1} sample sizes x "
          f"{len(settings['sampling_methods'])} sampling methods = {len(frame)} experiments.")

    results, failures = run_grid(frame, matrices=settings["matrices"],
                                 first=settings["first"], total=settings["total"],
                                 workers=workers, cores_fraction=settings["cores_fraction"],
                                 threshold=settings["threshold"])

    ensure_outdir(os.path.join(out_dir, "_"))
    rmse = convergence(results)
    dims = dimensions(results)
    rmse.to_csv(os.path.join(out_dir, "convergence.csv"), index=False)
    dims.to_csv(os.path.join(out_dir, "dimensions.csv"), index=False)
    if len(failures):
        failures.to_csv(os.path.join(out_dir, "failures.csv"))
        print(f"[WARN] {len(failures)} experiment(s) failed; see failures.csv.")

    anomalies = index_anomalies(dims)
    if anomalies["negative_sum_si"] or anomalies["sum_si_above_one"]:
        print(f"[WARN] Index sums outside [0, 1] at the largest sample size: "
              f"{anomalies['negative_sum_si']} negative, "
              f"{anomalies['sum_si_above_one']} above one (of {anomalies['rows']}).")

    if do_plots and len(rmse) and dims["sum_si"].notna().any():
        paths = plot_all(rmse, dims, out_dir)
        print(f"[PLOT] Wrote {', '.join(os.path.basename(p) for p in paths.values())}")

    summary = {
        "settings": settings,
        "experiments": int(len(frame)),
        "failed": int(len(failures)),
        "anomalies": anomalies,
    }
    with open(os.path.join(out_dir, "summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    print(f"Study complete. See {out_dir}/ for results.")
    return rmse, dims, failures
