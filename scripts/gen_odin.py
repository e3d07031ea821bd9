#!/usr/bin/env python3
"""
gen_odin.py - Odin binding generator entry point

Generates DirectWrite/Direct2D bindings from a decoded Win32 metadata dump.

Usage:
    python scripts/gen_odin.py Windows.Win32.winmd.json.gz [-o dwrite.odin]
"""

import argparse
import os
import sys

script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from winmd_bindgen import GenerationError
from bindings import direct2d


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Generate Odin bindings from Win32 metadata')
    parser.add_argument('metadata', help='Decoded metadata dump (.json or .json.gz)')
    parser.add_argument('-o', '--output', default='dwrite.odin',
                        help='Output file (default: dwrite.odin)')
    args = parser.parse_args(argv)

    gen = direct2d.configure()
    try:
        gen.generate_file(args.metadata, args.output)
    except GenerationError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
