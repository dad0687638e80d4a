import argparse
import logging
import os
import sys
from typing import List, Optional

import graphviz

from nfa2dfa.formatting import format_dfa, format_minimized, format_subset_table
from nfa2dfa.nfa_parser import load_nfa
from nfa2dfa.pipeline import ConversionResult, convert
from nfa2dfa.utils import OUTPUT_DIR, ConfigurationError, StateLimitExceeded

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_USAGE = 2
EXIT_STATE_LIMIT = 3
EXIT_IO = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='nfa2dfa',
        description='Convert an NFA to a DFA with subset construction, then minimize it.')
    parser.add_argument('input', help='NFA description (.nfa text, .json or .json5)')
    parser.add_argument(
        '--max-states',
        type=int,
        default=None,
        help='abort when the DFA would grow past this many states')
    parser.add_argument(
        '--subsets',
        action='store_true',
        help='also print which NFA states every DFA state stands for')
    parser.add_argument(
        '--render',
        metavar='DIR',
        default=None,
        help=f'render the NFA, DFA and minimized DFA with graphviz into DIR (e.g. {OUTPUT_DIR})')
    parser.add_argument('--format', default='svg', help='graphviz output format (default: svg)')
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (default: WARNING)')
    return parser


def render(result: ConversionResult, name: str, directory: str, fmt: str) -> None:
    graphs: List[graphviz.Digraph] = [
        result.nfa.visualize(),
        result.dfa.visualize(),
        result.minimized.visualize()
    ]
    for graph in graphs:
        graph.format = fmt
        filename = f'{name}.{graph.name}'
        path = graph.render(filename=filename, directory=directory, cleanup=True)
        logger.info('%s saved to %s', graph.name, path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_states is not None and args.max_states < 1:
        # exits with EXIT_USAGE
        parser.error('--max-states must be positive')

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s: %(message)s',
    )

    try:
        logger.info('reading NFA from %s ...', args.input)
        nfa = load_nfa(args.input)
    except ConfigurationError as e:
        logger.error('%s: %s', args.input, e)
        return EXIT_CONFIGURATION
    except OSError as e:
        logger.error('cannot read %s: %s', args.input, e)
        return EXIT_IO

    try:
        result = convert(nfa, args.max_states)
    except StateLimitExceeded as e:
        logger.error('%s', e)
        return EXIT_STATE_LIMIT

    name = os.path.basename(args.input)
    print(f'NFA {name} to DFA:')
    print(format_dfa(result.dfa))
    if args.subsets:
        print(format_subset_table(result.dfa))
    print()
    print(f'Minimized DFA from {name}:')
    print(format_minimized(result.minimized))

    if args.render is not None:
        try:
            render(result, os.path.splitext(name)[0], args.render, args.format)
        except (OSError, graphviz.ExecutableNotFound) as e:
            logger.error('rendering failed: %s', e)
            return EXIT_IO
    return EXIT_OK


def run() -> None:
    sys.exit(main())
