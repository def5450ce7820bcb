import sys

from modloader.cli._dispatcher import main

sys.exit(main())
