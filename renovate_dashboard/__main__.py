import sys

from renovate_dashboard.cli import main

if __name__ == "__main__":
    sys.exit(main())
