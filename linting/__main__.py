import sys

from . import run_all

if __name__ == "__main__":
    sys.exit(run_all())
