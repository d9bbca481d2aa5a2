import sys

from knockr.knockclient import main

sys.exit(main())
