#!/usr/bin/env python3
"""Run MindPad from a source checkout, with the same preflight checks as the installed app."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mindpad.launcher import main

if __name__ == "__main__":
    sys.exit(main())
