"""Entry point for arcpilot

Injects virtual gamepads, runs the scripted players for a profile and exits
0 when every player reached the minimum score.
"""
import argparse
import logging
import sys
from pathlib import Path

from devices.telemetry_file import JsonTelemetryFile
from harness import Harness
from settings import SettingsError, load_settings

LOG = logging.getLogger("arcpilot")

DEFAULT_PROFILE = Path(__file__).resolve().parent / "profiles" / "arc_bundas.yaml"


def build_parser():
    parser = argparse.ArgumentParser(description="arcpilot: scripted gamepad players for arcade game tests")
    parser.add_argument("--profile", default=str(DEFAULT_PROFILE), help="YAML run profile")
    parser.add_argument("--telemetry", help="JSON scoreboard file written by the game (omit for a dry run)")
    parser.add_argument("--duration", type=float, help="override test duration in seconds")
    parser.add_argument("--seed", type=int, help="override random seed for reproducible runs")
    parser.add_argument("--min-score", type=int, help="override minimum score per player")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'registry', 'agent', 'pulses', 'harness')")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)
    for module in args.debug_modules:
        logging.getLogger(f"arcpilot.{module}").setLevel(logging.DEBUG)

    try:
        settings = load_settings(args.profile)
        if args.duration is not None:
            settings.duration_s = args.duration
        if args.seed is not None:
            settings.seed = args.seed
        if args.min_score is not None:
            settings.min_score = args.min_score
        settings.validate()
    except (OSError, SettingsError) as e:
        LOG.error("invalid profile %s: %s", args.profile, e)
        return 2

    telemetry = JsonTelemetryFile(args.telemetry) if args.telemetry else None
    try:
        verdict = Harness(settings, telemetry).run()
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
        return 1
    return verdict.exit_code


if __name__ == "__main__":
    sys.exit(main())
