"""Generate MacPorts Portfiles for Go projects."""

__version__ = "0.4.0"
