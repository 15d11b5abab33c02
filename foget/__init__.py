"""Personal command reference backed by a TOML descriptions file."""

__version__ = "0.3.0"
