import sys

from balancing_scale.cli import main

sys.exit(main())
