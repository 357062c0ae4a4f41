import sys

from chart_synthesizer.cli import main

sys.exit(main())
