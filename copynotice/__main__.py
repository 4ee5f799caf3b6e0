import sys

from copynotice.main import main

sys.exit(main())
