import sys

from xd.adapters.stdio.app import main

sys.exit(main())
