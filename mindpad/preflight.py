"""Dependency preflight checks.

The GUI needs GTK 4 and libadwaita bindings, which pip cannot install on
its own. Set MINDPAD_SKIP_PREFLIGHT=1 to bypass (useful for development).
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PreflightResult:
    ok: bool
    message: str


def _check_core_deps() -> Optional[str]:
    """Return an error message if the libraries every entry point needs are missing."""
    try:
        import markdown  # noqa: F401
    except Exception as exc:  # pylint: disable=broad-except
        return (
            "Missing Python dependency 'Markdown'. "
            "Install it with pip (Markdown). "
            f"Underlying error: {exc}"
        )

    try:
        import cairo  # type: ignore[import-not-found]  # noqa: F401
    except Exception as exc:  # pylint: disable=broad-except
        return (
            "Missing Python dependency 'pycairo'. "
            "Install it with pip (pycairo) and ensure cairo is available. "
            f"Underlying error: {exc}"
        )

    return None


def _check_gtk_deps() -> Optional[str]:
    """Return an error message if GTK 4 / libadwaita bindings are missing."""
    try:
        import gi  # type: ignore[import-not-found]

        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")
        gi.require_version("Gdk", "4.0")
        from gi.repository import Gtk, Adw, Gdk  # type: ignore[import-not-found]  # noqa: F401
    except Exception as exc:  # pylint: disable=broad-except
        return (
            "Missing GTK/libadwaita bindings. Install your distribution's GTK 4, "
            "libadwaita and PyGObject packages (e.g. gtk4 libadwaita python3-gobject). "
            f"Underlying error: {exc}"
        )

    return None


def run_preflight(*, check_gtk: bool = True) -> PreflightResult:
    """Run checks and return a structured result."""
    if os.environ.get("MINDPAD_SKIP_PREFLIGHT") == "1":
        return PreflightResult(True, "Preflight skipped via MINDPAD_SKIP_PREFLIGHT=1")

    dep_error = _check_core_deps()
    if dep_error:
        return PreflightResult(False, dep_error)

    if check_gtk:
        dep_error = _check_gtk_deps()
        if dep_error:
            return PreflightResult(False, dep_error)

    return PreflightResult(True, "Preflight OK")


def run_preflight_or_die(*, check_gtk: bool = True) -> None:
    result = run_preflight(check_gtk=check_gtk)
    if result.ok:
        return

    sys.stderr.write("\nMindPad preflight check failed:\n")
    sys.stderr.write(result.message)
    sys.stderr.write("\n\n")
    sys.stderr.write(
        "Suggested setup:\n"
        "  install GTK 4, libadwaita and PyGObject from your distribution\n"
        "  pip install -e .\n\n"
    )
    raise SystemExit(1)
