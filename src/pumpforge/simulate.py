import argparse
import os
import time

import numpy as np
from loguru import logger

from .config import pump_config_from_dict
from .operating_map import solve_mass_flow, sweep_mass_flow
from .pump import evaluate
from .result import (
    format_results,
    plot_sweep,
    plot_ts_diagram,
    save_results_csv,
    save_results_json,
    save_sweep_csv,
)
from .thermo import CoolPropProvider
from .validate import validate_case


def case_inputs(case):
    """
    Unpacks a validated case dictionary.
    Returns:
        tuple: (P_su, h_su, P_ex, fluid, M_dot, config)
    """
    return (
        case["inlet"]["P"],
        case["inlet"]["h"],
        case["outlet"]["P"],
        case["fluid"],
        case["M_dot"],
        pump_config_from_dict(case["pump"]),
    )


def timed_evaluate(P_su, h_su, P_ex, fluid, M_dot, config, provider=None):
    """Run pumpforge.pump.evaluate and return (result, ts, elapsed seconds)."""
    start = time.perf_counter()
    result, ts = evaluate(P_su, h_su, P_ex, fluid, M_dot, config, provider)
    elapsed = time.perf_counter() - start
    logger.debug(f"Pump evaluation took {elapsed:.4f} s")
    return result, ts, elapsed


def _load_case(fname):
    """Validate a case file and unpack it, exiting with code 1 on any failure."""
    if not os.path.exists(fname):
        logger.error(f"Pump case file '{fname}' not found.")
        raise SystemExit(1)
    try:
        case = validate_case(fname)
    except Exception as e:
        logger.error(f"Failed to validate pump case file '{fname}': {e}")
        raise SystemExit(1)
    try:
        inputs = case_inputs(case)
    except ValueError as e:
        # InvalidModelType is a ValueError too
        logger.error(f"Invalid pump parameters in '{fname}': {e}")
        raise SystemExit(1)
    return case, inputs


def _cmd_run(args):
    """Evaluate one pump case."""
    case, (P_su, h_su, P_ex, fluid, M_dot, config) = _load_case(args.case)
    result, ts, elapsed = timed_evaluate(P_su, h_su, P_ex, fluid, M_dot, config, CoolPropProvider())

    logger.info("Working conditions:")
    logger.info(f"fluid={fluid}, P_su={P_su} Pa, h_su={h_su} J/kg, P_ex={P_ex} Pa, M_dot={M_dot} kg/s")
    logger.info(f"modelType={config.model_type}, V_s={config.V_s} m3")
    logger.info("=== Results ===")
    for line in format_results(result):
        logger.info(line)
    if not result.accepted:
        logger.warning(f"Flag {result.flag}: ideal-machine values reported")

    base_name = os.path.splitext(os.path.basename(args.case))[0]
    save_results_json(result, ts, f"{base_name}_results.json", args.output_dir, inputs=case, time=elapsed)
    save_results_csv(result, f"{base_name}_results.csv", args.output_dir)
    if args.plot:
        plot_ts_diagram(ts, f"{base_name}_ts.png", args.output_dir, label=config.model_type)
    logger.info(f"Saved {base_name}_results.json and {base_name}_results.csv")


def _cmd_validate(args):
    """Validate a pump case file."""
    _, (_, _, _, _, _, config) = _load_case(args.case)
    logger.debug(f"Parsed {config.model_type} pump configuration")
    logger.info(f"Pump case '{args.case}' is valid.")


def _cmd_sweep(args):
    """Evaluate a pump case over a mass flow range."""
    case, (P_su, h_su, P_ex, fluid, M_dot, config) = _load_case(args.case)
    sweep = case.get("sweep", {})
    M_dot_min = args.min if args.min is not None else sweep.get("M_dot_min", 0.1 * M_dot)
    M_dot_max = args.max if args.max is not None else sweep.get("M_dot_max", 2.0 * M_dot)
    points = args.points or sweep.get("points", 20)

    M_dots = np.linspace(M_dot_min, M_dot_max, points)
    df = sweep_mass_flow(P_su, h_su, P_ex, fluid, M_dots, config, CoolPropProvider())

    base_name = os.path.splitext(os.path.basename(args.case))[0]
    save_sweep_csv(df, f"{base_name}_sweep.csv", args.output_dir)
    if args.plot:
        plot_sweep(df, f"{base_name}_sweep.png", args.output_dir)
    logger.info(f"Saved {base_name}_sweep.csv ({len(df)} points)")


def _cmd_speed(args):
    """Find the mass flow delivered at an imposed speed."""
    _, (P_su, h_su, P_ex, fluid, _, config) = _load_case(args.case)
    try:
        M_dot, result, ts = solve_mass_flow(P_su, h_su, P_ex, fluid, args.N_pp, config, CoolPropProvider())
    except ValueError as e:
        logger.error(f"Speed solve failed: {e}")
        raise SystemExit(1)

    logger.info(f"M_dot = {M_dot:.6g} [kg/s]")
    for line in format_results(result):
        logger.info(line)

    base_name = os.path.splitext(os.path.basename(args.case))[0]
    save_results_json(result, ts, f"{base_name}_speed_results.json", args.output_dir, M_dot=M_dot, N_pp=args.N_pp)


def main():
    parser = argparse.ArgumentParser(
        description="pumpforge - Volumetric pump model for ORC systems",
        prog="pumpforge",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pumpforge run
    run_parser = subparsers.add_parser("run", help="Evaluate a pump case")
    run_parser.add_argument("case", help="Path to the pump case JSON file")
    run_parser.add_argument("--plot", action="store_true", help="Save a T-s diagram")
    run_parser.add_argument("--output-dir", "-o", default="outputs", help="Output directory (default: outputs)")

    # pumpforge validate
    validate_parser = subparsers.add_parser("validate", help="Validate a pump case JSON file")
    validate_parser.add_argument("case", help="Path to the pump case JSON file")

    # pumpforge sweep
    sweep_parser = subparsers.add_parser("sweep", help="Sweep the mass flow rate")
    sweep_parser.add_argument("case", help="Path to the pump case JSON file")
    sweep_parser.add_argument("--min", type=float, help="Lowest mass flow rate [kg/s]")
    sweep_parser.add_argument("--max", type=float, help="Highest mass flow rate [kg/s]")
    sweep_parser.add_argument("--points", type=int, help="Number of sweep points")
    sweep_parser.add_argument("--plot", action="store_true", help="Save an operating map plot")
    sweep_parser.add_argument("--output-dir", "-o", default="outputs", help="Output directory (default: outputs)")

    # pumpforge speed
    speed_parser = subparsers.add_parser("speed", help="Solve the mass flow at an imposed speed")
    speed_parser.add_argument("case", help="Path to the pump case JSON file")
    speed_parser.add_argument("--N-pp", dest="N_pp", type=float, required=True, help="Rotational speed [rpm]")
    speed_parser.add_argument("--output-dir", "-o", default="outputs", help="Output directory (default: outputs)")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        raise SystemExit(1)

    commands = {
        "run": _cmd_run,
        "validate": _cmd_validate,
        "sweep": _cmd_sweep,
        "speed": _cmd_speed,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
