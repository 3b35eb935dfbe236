import sys

from .register import main

sys.exit(main())
