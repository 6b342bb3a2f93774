import sys

from .codegen import main

sys.exit(main())
