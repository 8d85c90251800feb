"""Equalizer -- compose a frontend stack and scaffold it.

The blueprint core (:mod:`equalizer.blueprint`) is pure and synchronous;
:mod:`equalizer.scaffolder` runs the resulting commands and patches.
"""

__version__ = "0.1.0"
