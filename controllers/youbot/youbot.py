"""Webots controller for the kitchen youBot.

Webots runs ``controllers/<name>/<name>.py`` for a robot whose controller
field is ``youbot``. Everything lives in the ``kitchenbot`` package.
"""

import sys

from kitchenbot.controller import main

if __name__ == "__main__":
    sys.exit(main())
