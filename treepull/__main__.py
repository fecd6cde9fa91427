import sys

from treepull.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
