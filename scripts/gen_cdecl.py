#!/usr/bin/env python3
"""
gen_cdecl.py - print the C declarations generated for a binding

Usage:
    python scripts/gen_cdecl.py HelloWorld.ffipp --compiler msvc
    python scripts/gen_cdecl.py HelloWorld.ffipp --detect [--library PATH]
"""

import argparse
import logging
import os
import sys

script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from cxxffi import BindingError, Generator, Namespace, parse_file
from cxxffi.detector import Detector


def print_declarations(path: str, compiler: str):
    """Print the declaration stream for one compiler"""
    binding = parse_file(path)
    gen = Generator(Namespace())
    print(gen.declare(binding, compiler), end='')


def print_detected(path: str, libraries: list[str]):
    """Detect the compiler, then list the accessors that resolved"""
    binding = parse_file(path)
    namespace = Namespace()
    library, compiler = Detector(namespace=namespace).detect(binding, libraries or None)
    print(f'=== {library!r} was built by {compiler}')

    table = Generator(namespace).generate(binding, compiler, library)
    for name in table:
        print(f'  {name}')
    for skipped in table.skipped:
        print(f'  >> skipped {skipped.accessor}: {skipped.reason}')


def main() -> int:
    parser = argparse.ArgumentParser(description='Print C declarations generated for a binding')
    parser.add_argument('binding', help='Path to the binding file')
    parser.add_argument('--compiler', default='itanium',
                        help='Compiler to generate for (default: itanium)')
    parser.add_argument('--detect', action='store_true',
                        help='Detect the compiler from the binding\'s libraries instead')
    parser.add_argument('--library', action='append', default=[],
                        help='Library to try before the binding\'s own (repeatable)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log skipped overloads')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    try:
        if args.detect:
            print_detected(args.binding, args.library)
        else:
            print_declarations(args.binding, args.compiler)
    except (BindingError, OSError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
