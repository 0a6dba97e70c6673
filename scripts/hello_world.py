#!/usr/bin/env python3
"""
hello_world.py - drive the HelloWorld sample through cxxffi

Build the sample library first, then point the script at it:

    g++ -shared -fPIC -o libHelloWorld.so scripts/bindings/HelloWorld.cpp
    python scripts/hello_world.py --library ./libHelloWorld.so
"""

import argparse
import ctypes
import logging
import os
import sys

script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from cxxffi import BindingError, loadfile

DEFAULT_BINDING = os.path.join(script_dir, 'bindings', 'HelloWorld.ffipp')


def run(binding_path: str, libraries: list[str]):
    binding = loadfile(binding_path, libraries or None)
    print(f'=== Symbols exposed by {os.path.basename(binding_path)} ({binding.compiler})')
    for name in binding:
        print(f'  {name}')
    for skipped in binding.skipped:
        print(f'  >> skipped {skipped.accessor}: {skipped.reason}')

    binding.HelloClass__StaticHello_V()

    hello = binding.HelloClass()
    binding.HelloClass__C_LID(ctypes.byref(hello), 1, 2, 3.0)
    print(hello.one, hello.two, hello.three)

    binding.HelloClass__SayHello_V(ctypes.byref(hello))
    binding.HelloClass__Say_PQC(ctypes.byref(hello), b'Goodbye from Python')
    binding.HelloClass__D_V(ctypes.byref(hello))


def main() -> int:
    parser = argparse.ArgumentParser(description='Call the HelloWorld sample library through cxxffi')
    parser.add_argument('--binding', default=DEFAULT_BINDING, help='Path to the binding file')
    parser.add_argument('--library', action='append', default=[],
                        help='Library to try before the binding\'s own (repeatable)')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    try:
        run(args.binding, args.library)
    except (BindingError, OSError, AttributeError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
