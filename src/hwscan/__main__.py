import sys

from hwscan.main import main

sys.exit(main())
