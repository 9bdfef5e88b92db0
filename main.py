#!/usr/bin/env python3
"""
Replays a scripted navigation session headlessly and prints the history.

    python3 main.py --max-size 3 /a /b /c back "/editor?file=/d.md" rm-file:/d.md
"""
import sys
import signal
import argparse
from pathlib import Path

from PySide6.QtCore import QCoreApplication

# Add project root to path so imports work
sys.path.append(str(Path(__file__).parent))

from core.history_settings import HistorySettings
from core.router import Router
from ui.managers.navigation_manager import NavigationManager

COMMANDS = ("back", "forward", "clear")
PRUNE_PREFIXES = {"rm-file:": "rm-file", "rm-folder:": "rm-folder"}


def parse_step(step: str) -> tuple[str, str]:
    """
    Turns one CLI step into (action, argument).
    Anything that is not a command or a prune is a location to visit.
    """
    if step in COMMANDS:
        return step, ""
    for prefix, action in PRUNE_PREFIXES.items():
        if step.startswith(prefix):
            path = step[len(prefix):]
            if not path:
                raise argparse.ArgumentTypeError(f"missing path in step '{step}'")
            return action, path
    if not step.startswith("/"):
        raise argparse.ArgumentTypeError(f"location must start with '/': '{step}'")
    return "visit", step


def run_steps(manager: NavigationManager, router: Router, steps):
    for action, arg in steps:
        if action == "visit":
            router.navigate_to(arg)
        elif action == "back":
            manager.goBack()
        elif action == "forward":
            manager.goForward()
        elif action == "clear":
            manager.clear()
        elif action == "rm-file":
            manager.onFileRemoved(arg)
        elif action == "rm-folder":
            manager.onFolderRemoved(arg)


def format_history(manager: NavigationManager) -> str:
    history = manager.history
    lines = []
    for index, location in enumerate(history.entries):
        marker = "→" if index == history.cursor else " "
        lines.append(f" {marker} [{index}] {location}")
    if not lines:
        lines.append("   (empty)")
    lines.append(f"  back: {manager.canGoBack}  forward: {manager.canGoForward}")
    return "\n".join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Locus navigation history replay")
    parser.add_argument("steps", nargs="*", type=parse_step,
                        help="Location (/path?query), back, forward, clear, rm-file:PATH, rm-folder:PATH")
    parser.add_argument("--max-size", type=int, default=None, help="Override History/maxSize for this run")
    parser.add_argument("--start", default="/", help="Location the router starts on")
    return parser.parse_args(argv)


def main(argv=None, settings: HistorySettings | None = None):
    """Entry point. `settings` defaults to the user's QSettings store."""
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    args = parse_args(argv)
    if args.max_size is not None and args.max_size < 1:
        print(f"--max-size must be positive, got {args.max_size}", file=sys.stderr)
        return 2

    # Settings and signals need a core application, no event loop
    if QCoreApplication.instance() is None:
        app = QCoreApplication(sys.argv[:1])

    if settings is None:
        settings = HistorySettings()
    manager = NavigationManager(settings)
    if args.max_size is not None:
        # Run-only override, not persisted
        manager.history.set_max_size(args.max_size)

    router = Router(args.start)
    manager.attach(router)
    run_steps(manager, router, args.steps)

    print(format_history(manager))
    manager.cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(main())
