__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checkers",
    "cli",
    "commands",
    "config",
    "contracts",
    "core",
    "engine",
    "modules",
    "reporting",
]
