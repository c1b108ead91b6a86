import sys

from auto_commit.main import main

sys.exit(main())
