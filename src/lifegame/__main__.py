import sys

from lifegame.cli import main

sys.exit(main())
