import csv
import json
import os

import matplotlib.pyplot as plt

RESULT_UNITS = {
    "T_ex": "K",
    "h_ex": "J/kg",
    "N_pp": "rpm",
    "W_dot": "W",
    "epsilon_is": "-",
    "epsilon_vol": "-",
    "M": "kg",
    "flag": "-",
}


def format_results(result):
    """Return one 'name = value [unit]' line per result field."""
    return [f"{name:>12} = {value:.6g} [{RESULT_UNITS[name]}]" for name, value in result.to_dict().items()]


def save_results_json(result, ts, fname="results.json", output_dir="outputs", **extra):
    """Save one pump evaluation (and any extra entries, e.g. inputs or timing) to JSON."""
    os.makedirs(output_dir, exist_ok=True)
    data = {**extra, "results": result.to_dict(), "TS": ts.to_dict()}
    path = os.path.join(output_dir, fname)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)
    return path


def save_results_csv(result, fname="results.csv", output_dir="outputs"):
    """Save one pump evaluation as a Quantity/Value/Unit table."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, fname)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Quantity", "Value", "Unit"])
        for name, value in result.to_dict().items():
            writer.writerow([name, value, RESULT_UNITS[name]])
    return path


def save_sweep_csv(df, fname="sweep.csv", output_dir="outputs"):
    """Save a mass-flow sweep DataFrame to CSV."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, fname)
    df.to_csv(path, index=False)
    return path


def plot_ts_diagram(ts, fname="ts.png", output_dir="outputs", label="pump"):
    """Plot the supply-to-exhaust path on a T-s diagram."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, fname)

    plt.figure(figsize=(6, 4))
    plt.plot(ts.s, ts.T, "o-", label=label)
    plt.annotate("su", (ts.s[0], ts.T[0]))
    plt.annotate("ex", (ts.s[1], ts.T[1]))
    plt.xlabel("Entropy [J/kg-K]")
    plt.ylabel("Temperature [K]")
    plt.title("Pump T-s Diagram")
    plt.legend()
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def plot_sweep(df, fname="sweep.png", output_dir="outputs"):
    """Plot speed, power and efficiencies against mass flow."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, fname)

    fig, axes = plt.subplots(3, 1, figsize=(7, 9), sharex=True)
    axes[0].plot(df["M_dot"], df["N_pp"], color="tab:blue")
    axes[0].set_ylabel("N_pp [rpm]")
    axes[1].plot(df["M_dot"], df["W_dot"], color="tab:red")
    axes[1].set_ylabel("W_dot [W]")
    axes[2].plot(df["M_dot"], df["epsilon_is"], label="epsilon_is")
    axes[2].plot(df["M_dot"], df["epsilon_vol"], label="epsilon_vol")
    axes[2].set_ylabel("Efficiency [-]")
    axes[2].set_xlabel("Mass flow rate [kg/s]")
    axes[2].legend()

    # ideal-machine fallback points
    rejected = df[df["flag"] < 0]
    if not rejected.empty:
        axes[1].scatter(rejected["M_dot"], rejected["W_dot"], marker="x", color="k", label="fallback")
        axes[1].legend()

    fig.suptitle("Pump Operating Map")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
