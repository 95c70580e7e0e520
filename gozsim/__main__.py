import sys

from gozsim.main import main

sys.exit(main())
