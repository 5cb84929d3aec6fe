import sys

from callquiet.daemon import main

sys.exit(main())
