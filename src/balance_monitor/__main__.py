import sys

from balance_monitor.cli import main

sys.exit(main())
