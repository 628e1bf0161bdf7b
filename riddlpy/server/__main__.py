import sys

from riddlpy.server import main

sys.exit(main())
