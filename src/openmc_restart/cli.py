"""Command line entry point: replay one particle from a restart file."""

import argparse
import logging
import sys

from .errors import RestartError
from .restart import build_restart
from .settings import Settings
from .types import MAX_EVENTS


def _bounded_int(minimum):
    def convert(text):
        value = int(text)
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
        return value
    return convert


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Replay a single particle from a particle restart file')
    parser.add_argument('path', help='Particle restart file (HDF5)')
    parser.add_argument('--multigroup', action='store_true',
                        help='Interpret the stored energy as a multigroup group index')
    parser.add_argument('--write-tracks', action='store_true',
                        help='Write the particle track to an HDF5 file')
    parser.add_argument('--track-dir', type=str, default='.',
                        help='Directory for track files (default: .)')
    parser.add_argument('--plot', type=str, default=None,
                        help='Write an x-y track plot (PNG) to this path')
    parser.add_argument('--report', type=str, default=None,
                        help='Write a PDF replay report to this path')
    parser.add_argument('--vacuum', action='store_true',
                        help='Use vacuum instead of reflective outer boundaries')
    parser.add_argument('--max-events', type=_bounded_int(1), default=MAX_EVENTS,
                        help=f'Maximum events per history (default: {MAX_EVENTS:,})')
    parser.add_argument('--seed', type=int, default=1,
                        help='Master seed of the original run (default: 1)')
    parser.add_argument('--previous-generations', type=_bounded_int(0), default=0,
                        help='Generations completed before the original run started (default: 0)')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    settings = Settings(
        path_particle_restart=args.path,
        run_ce=not args.multigroup,
        write_all_tracks=args.write_tracks or args.plot is not None or args.report is not None,
        track_dir=args.track_dir,
        max_events=args.max_events,
        seed=args.seed,
        previous_generations=args.previous_generations,
        vacuum_boundary=args.vacuum,
    )

    logging.basicConfig(level=logging.WARNING,
                        format="%(asctime)s [%(levelname)s] %(message)s")
    # Restart runs are debugging runs: show everything this package logs
    logging.getLogger("openmc_restart").setLevel(logging.DEBUG)

    driver, engine = build_restart(settings)
    try:
        result = driver.run()
    except (RestartError, FileNotFoundError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.plot:
        from .report.charts import track_xy_chart
        track_xy_chart([state[0] for state in result.particle.tracks], args.plot,
                       geometry=engine.geometry,
                       title=f'Particle {result.record.id} Track')
        print(f"Track plot saved to {args.plot}")

    if args.report:
        from .report.pdf_report import generate_report
        generate_report(result, args.report, geometry=engine.geometry)
        print(f"Report saved to {args.report}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
