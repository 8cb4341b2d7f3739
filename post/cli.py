import sys
from pathlib import Path

import fncli

from .core.errors import PostError


def dispatch(argv: list[str]) -> int:
    fncli.autodiscover(Path(__file__).parent, "post")
    try:
        return fncli.dispatch(argv)
    except PostError as e:
        sys.stderr.write(f"{e}\n")
        return 1


def main():
    sys.exit(dispatch(["post", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
