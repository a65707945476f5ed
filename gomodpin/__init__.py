"""gomodpin — pin a go.mod to the dependency versions it already uses."""

__version__ = "0.1.0"
