import argparse

import pandas as pd

from .doe import SAMPLING_METHODS
from .runner import ExperimentRow, run_experiment
from .sobol import FIRST_ESTIMATORS, TOTAL_ESTIMATORS
from .study import run_study
from .utils import check_settings, parse_settings_json, write_settings_template


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Metafunction experiments on the convergence of Sobol' indices."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # --- template ---
    p_tpl = sub.add_parser("template", help="Write a settings template JSON file.")
    p_tpl.add_argument("--output", default="settings_template.json",
                       help="Output path (default: settings_template.json)")

    # --- single ---
    p_one = sub.add_parser("single", help="Run one experiment and print its indices.")
    p_one.add_argument("--k", type=int, required=True, help="Number of inputs.")
    p_one.add_argument("--seed", type=int, required=True, help="Seed of the experiment.")
    p_one.add_argument("--order", type=int, default=1, help="Highest interaction order (default: 1).")
    p_one.add_argument("--phi", type=int, default=1,
                       help="Distribution selector, 1-7 or 8 for a random mix (default: 1).")
    p_one.add_argument("--model-runs", type=int, default=2 ** 10,
                       help="Base sample size N (default: 1024).")
    p_one.add_argument("--sample-method", choices=SAMPLING_METHODS, default="QRN",
                       help="Sampling method (default: QRN).")
    p_one.add_argument("--first", choices=FIRST_ESTIMATORS, default="azzini",
                       help="First-order estimator (default: azzini).")
    p_one.add_argument("--total", choices=TOTAL_ESTIMATORS, default="azzini",
                       help="Total-order estimator (default: azzini).")

    # --- run ---
    p_run = sub.add_parser("run", help="Run the full experiment grid.")
    p_run.add_argument("--settings", default=None,
                       help="Path to a settings JSON file (default: built-in settings).")
    p_run.add_argument("--out-dir", default="outputs", help="Output directory (default: outputs).")
    p_run.add_argument("--workers", type=int, default=None,
                       help="Worker processes (default: cores_fraction of the logical cores).")
    p_run.add_argument("--N", type=int, default=None, help="Override the number of design points.")
    p_run.add_argument("--max-k", type=int, default=None, help="Override the maximum number of inputs.")
    p_run.add_argument("--seed", type=int, default=None, help="Override the design seed.")
    p_run.add_argument("--no-plots", action="store_true", help="Skip the figures.")

    args = parser.parse_args(argv)

    if args.command == "template":
        write_settings_template(path=args.output)
    elif args.command == "single":
        row = ExperimentRow(k=args.k, seed=args.seed, order=args.order, phi=args.phi,
                            model_runs=args.model_runs, sample_method=args.sample_method)
        res = run_experiment(row, first=args.first, total=args.total)
        with pd.option_context("display.float_format", "{:.4f}".format):
            print(res.indices.results.to_string(index=False))
        print(f"Mean output: {res.output:.6g} | sum Si = {res.indices.si_sum:.4f} "
              f"| sum Ti = {res.indices.ti_sum:.4f}")
    elif args.command == "run":
        settings = parse_settings_json(args.settings) if args.settings else check_settings({})
        overrides = {"N": args.N, "max_k": args.max_k, "seed": args.seed}
        settings.update({key: value for key, value in overrides.items() if value is not None})
        run_study(settings, out_dir=args.out_dir, workers=args.workers,
                  do_plots=not args.no_plots)


if __name__ == "__main__":
    main()
