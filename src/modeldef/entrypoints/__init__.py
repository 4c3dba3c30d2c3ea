"""Entrypoints (inbound adapters) for modeldef.

Expose the library outside of Python code: the ``modeldef`` command-line
interface.
"""
