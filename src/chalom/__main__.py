import sys

from chalom.app import main

sys.exit(main())
