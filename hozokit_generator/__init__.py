"""Hozokit generator -- scaffolds WordPress themes built on the Hozokit starter kit.

The ``app`` generator downloads WordPress (optionally) and the latest Hozokit
release, extracts both into a project folder, renders the theme files and
installs the theme's Node dependencies. The ``component`` generator adds a
Twig component to an existing theme.
"""

__version__ = "0.1.0"
