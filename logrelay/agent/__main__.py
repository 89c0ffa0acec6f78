import sys

from logrelay.agent.cli import main

sys.exit(main())
