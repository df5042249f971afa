import sys

from osu_difficulty.app import main

if __name__ == "__main__":
    sys.exit(main())
