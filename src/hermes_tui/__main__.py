# =============================================================================
# Hermes Entry Point for `python -m hermes_tui`
# =============================================================================
# This module allows Hermes to be run as a Python module:
#
#   python -m hermes_tui
#
# This is equivalent to running the 'hermes' command after installation.
# =============================================================================

import sys

from hermes_tui.app import main

if __name__ == "__main__":
    sys.exit(main())
