"""
CLI layer for translate-spine.

Terminal transport only: argument parsing, coloured output and fixture
loading. Behaviour lives in the framework, consensus and translation
packages.

Entry point::

    translate-spine --help
"""

from translate_spine.cli.app import app

__all__ = ["app"]
