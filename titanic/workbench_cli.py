"""Command line entry point for the survival workbench."""

import argparse
import logging

from console_ui import ConsoleUI
from model_manager import SIMULATION_SEED
from workbench import Workbench, WorkbenchConfig


def create_parser(description='Titanic Survival Workbench'):
    """Build the argparse parser for the workbench options.

    Args:
        description: Description for the CLI

    Returns:
        argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument('--seed', type=int, default=SIMULATION_SEED,
                        help=f'Seed of the survival simulation generator (default: {SIMULATION_SEED})')
    parser.add_argument('--delimiter', type=str, default=',',
                        help='CSV field delimiter (default: ",")')
    parser.add_argument('--no-headers', action='store_true',
                        help='CSV files have no header row')
    parser.add_argument('--script', type=str, default=None,
                        help='Run commands from this file, one per line, instead of the prompt')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    return parser


def create_cli(description='Titanic Survival Workbench', argv=None):
    """Parse options and run the workbench.

    Args:
        description: Description for the CLI
        argv: Argument list (default: sys.argv[1:])

    Returns:
        None (runs until `exit` or end of input)
    """
    args = create_parser(description).parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = WorkbenchConfig(
        seed=args.seed,
        delimiter=args.delimiter,
        has_headers=not args.no_headers,
    )

    if args.script is None:
        Workbench(config).run()
        return

    with open(args.script, encoding='utf-8') as script:
        Workbench(config, ui=ConsoleUI(stream=script)).run()


def main():
    create_cli()


if __name__ == "__main__":
    main()
