import sys

from assetlog.cli import main

sys.exit(main())
