#!/usr/bin/env python3

import json
import logging
import sys
from argparse import ArgumentParser, FileType
from contextlib import redirect_stdout
from .automatons import NFA
from .char import EPSILON
from .syntax import StructureError

parser = ArgumentParser(prog="thompson", description="Build a NFA out of a regexp syntax tree")
parser.add_argument("tree", nargs="?", type=FileType("r"), default="-",
                    help="JSON syntax tree, read stdin when omitted")
parser.add_argument("-s", "--split", dest="split", action="store_const", const=True, default=False,
                    help="Group the exported nodes and edges")
parser.add_argument("-c", "--closure", dest="closure", action="append", type=int, default=[],
                    metavar="LABEL", help="Print the closure of the given state instead of the graph")
parser.add_argument("--symbol", dest="symbol", default=EPSILON,
                    help="Transition symbol followed by the closure, epsilon by default")
parser.add_argument("-v", "--verbose", dest="verbose", action="store_const", const=True, default=False,
                    help="Debug mode, print generated automaton")


def main(argv=None):
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        tree = json.load(args.tree)
    except json.JSONDecodeError as exc:
        print("Invalid syntax tree:", exc, file=sys.stderr)
        return 1
    finally:
        if args.tree is not sys.stdin:
            args.tree.close()

    try:
        automaton = NFA.from_mapping(tree)
    except StructureError as exc:
        print("Invalid syntax tree:", exc, file=sys.stderr)
        return 1

    if args.verbose:
        with redirect_stdout(sys.stderr):
            automaton.print_mesh()

    if args.closure:
        try:
            states = [automaton.state(label) for label in args.closure]
        except KeyError as exc:
            print("Unknown state:", exc, file=sys.stderr)
            return 1
        closure = automaton.enclosure(states, args.symbol)
        print(json.dumps([state.label for state in closure]))
    else:
        print(json.dumps(automaton.cytograph(split=args.split), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
