"""MindPad launcher.

Provides a stable entry point that runs preflight checks before importing
GTK-related modules, which gives clearer error messages on new systems.
"""

from __future__ import annotations

import sys


def main() -> int:
    from mindpad.preflight import run_preflight_or_die

    run_preflight_or_die(check_gtk=True)

    from mindpad.app import main as app_main

    return int(app_main())


if __name__ == "__main__":
    raise SystemExit(main())
