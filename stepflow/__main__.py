import sys

from stepflow._cli import main

sys.exit(main())
