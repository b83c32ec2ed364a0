# Terminal package: simulated command routing

from labcheck.terminal.router import find_handler, route_command

__all__ = [
    "find_handler",
    "route_command",
]
