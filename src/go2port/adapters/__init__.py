"""Adaptadores de I/O: HTTP, lockfiles, checksums y render del Portfile."""
