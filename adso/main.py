"""Runs .adso files with the adso interpreter. Also uses the error handling context manager. Called from the adso
console script.
"""

import argparse
import sys

from adso.lang.error import ErrorHandler
from adso.lang.session import Session


def main(argv=None):
    """Runs adso interpreter. Called from adso console script."""
    assert sys.version_info >= (3, 8), "adso cannot be run with python < 3.8"

    parser = argparse.ArgumentParser(prog="adso", description="Interpret an adso program by calling its main function.")
    parser.add_argument("file", help="file to interpret and run")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--ast", action="store_true", help="print the syntax tree instead of running")
    group.add_argument("--tokens", action="store_true", help="print the token stream instead of running")
    args = parser.parse_args(argv)

    with ErrorHandler() as error_handler:
        sess = Session(error_handler, args.file)

        if args.tokens:
            for token in sess.tokens():
                print(f"{token.line}:{token.column}\t{token.kind}\t{token.value}")
        elif args.ast:
            print(sess.program.display())
        else:
            sess.run()


if __name__ == "__main__":
    main()
