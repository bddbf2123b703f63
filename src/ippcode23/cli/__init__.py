"""
IPPcode23 Command-Line Interface
================================

This package provides the command-line tool of the IPPcode23 package:

- **ippparse**: IPPcode23 to XML translator

The tool is a Click-based CLI application with help output and exit codes
that follow the IPPcode23 conventions (21, 22, 23 for source errors).
"""

__all__ = ["ippparse"]
