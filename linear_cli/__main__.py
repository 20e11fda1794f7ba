import sys

from linear_cli.cli import main

sys.exit(main())
