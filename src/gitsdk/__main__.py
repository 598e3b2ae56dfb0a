import sys

from gitsdk.cli import main

sys.exit(main())
