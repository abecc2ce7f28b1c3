import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from model import InputValidationError
from report import render_report, render_verdict
from scenario import load_scenario

console = Console()


def build_parser():
    parser = argparse.ArgumentParser(description="Launch interceptor decision for one scenario file.")
    parser.add_argument("scenario", help="JSON scenario file (points, parameters, lcm, puv)")
    parser.add_argument("--plot", action="store_true", help="plot the point sequence (matplotlib)")
    parser.add_argument("--quiet", action="store_true", help="print only the LAUNCH verdict")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    # 1. Load and validate inputs
    try:
        scenario = load_scenario(args.scenario)
        verdict = scenario.evaluate()
    except InputValidationError as exc:
        console.print(f"[bold red]INVALID INPUT:[/bold red] {exc}")
        return 2

    # 2. Report
    if args.quiet:
        render_verdict(verdict, console)
    else:
        render_report(scenario.points, scenario.params, scenario.lcm, scenario.puv, verdict, console)

    # 3. Optional plot
    if args.plot:
        from visualization import plot_scenario
        plot_scenario(scenario.points, verdict)
    return 0


if __name__ == "__main__":
    sys.exit(main())
