import sys

from osmpoints.cli import main

sys.exit(main())
