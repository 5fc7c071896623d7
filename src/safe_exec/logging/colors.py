"""ANSI color codes for terminal diagnostics.

Usage:
    from safe_exec.logging.colors import RED, RESET

    print(f"{RED}Unhandled failure{RESET}", file=sys.stderr)
"""

RESET = "\033[0m"

RED = "\033[38;5;196m"  # Unhandled failure - bright red
YELLOW = "\033[38;5;226m"  # Warnings - bright yellow
LIGHT_BLUE = "\033[38;5;153m"  # Traceback / context - light blue
MAGENTA = "\033[38;5;201m"  # Component tag - magenta

__all__ = [
    "RESET",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "MAGENTA",
]
