"""Bibliography parsing."""

from .parser import load_bibliography, parse_bibliography

__all__ = ["load_bibliography", "parse_bibliography"]
