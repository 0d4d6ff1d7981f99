"""Run the pipeline: python -m lfqbait config/experiment.yaml"""

import sys

from .pipeline import run_ip


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python -m lfqbait CONFIG_YAML")
        return 2

    result = run_ip(argv[0])
    return 1 if result['report']['failed'] else 0


if __name__ == '__main__':
    sys.exit(main())
