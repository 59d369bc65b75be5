import sys

from feedsmith.cli import main

sys.exit(main())
