import sys

from filler_bot.cli import main

sys.exit(main())
