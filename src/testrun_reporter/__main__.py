import sys

from testrun_reporter.cli import main

sys.exit(main())
