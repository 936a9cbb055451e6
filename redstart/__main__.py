"""Run redstart as ``python -m redstart [options] [project] [job]``."""

import sys

from redstart.runner import main


if __name__ == '__main__':
    sys.exit(main())
