import argparse
import contextlib
import logging
import sys
from dataclasses import dataclass

from rotor_machine.config import load_config, process
from rotor_machine.errors import EnigmaError, MalformedConfig
from rotor_machine.trace import LoggingTracer


@dataclass
class RunConfig:
    """Switches of one command line run."""

    verbose: bool = False   # log the path of every symbol
    group: int = 5          # symbols per output group


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rotor-machine',
        description='Encrypt and decrypt messages on a configurable rotor machine.',
    )
    parser.add_argument('config', help='rotor catalog file')
    parser.add_argument('input', nargs='?', help='message file (default: standard input)')
    parser.add_argument('output', nargs='?', help='result file (default: standard output)')
    parser.add_argument('--verbose', action='store_true', help='trace every converted symbol on stderr')
    parser.add_argument('--group', type=int, default=5, help='symbols per output group (default: 5)')
    return parser


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def run(config_path, input_path, output_path, cfg: RunConfig):
    tracer = LoggingTracer() if cfg.verbose else None
    machine = load_config(config_path, tracer=tracer)
    with contextlib.ExitStack() as stack:
        if input_path is None:
            in_ = sys.stdin
        else:
            in_ = stack.enter_context(open(input_path, encoding='utf-8'))
        if output_path is None:
            out = sys.stdout
        else:
            out = stack.enter_context(open(output_path, 'w', encoding='utf-8'))
        try:
            for line in process(machine, in_, cfg.group):
                print(line, file=out)
        except UnicodeDecodeError:
            raise MalformedConfig(f'could not read {input_path or "standard input"}: not UTF-8 text') from None


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.group < 1:
        parser.error('--group must be positive')

    cfg = RunConfig(verbose=args.verbose, group=args.group)
    configure_logging(cfg.verbose)
    try:
        run(args.config, args.input, args.output, cfg)
    except OSError as excp:
        print(f'Error: could not open {excp.filename}', file=sys.stderr)
        return 1
    except EnigmaError as excp:
        print(f'Error: {excp}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
