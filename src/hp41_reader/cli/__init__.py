"""
HP-41 Reader Command-Line Interface
===================================

This package provides the command-line tool for the HP-41 reader:

- **hp41read**: list ports, capture live printer output, decode captures

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["hp41read"]
