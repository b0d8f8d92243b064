import sys

from .gui_main import main

sys.exit(main())
