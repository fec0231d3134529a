"""Allow ``python -m gpsd_locator`` to run the GPSD client."""

from __future__ import annotations

import sys

from gpsd_locator.gpsd.main_gpsd import run


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
