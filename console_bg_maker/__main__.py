import sys

from console_bg_maker.cli import main

sys.exit(main())
