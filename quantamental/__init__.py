"""
Quantamental - site checks and momentum backtest tooling.

Companion package for the Quantamental Finance blog. Verifies the Hugo
site configuration and content front matter, and implements the
index-momentum backtest recipe used in the blog's analysis posts.
"""

__version__ = "0.1.0"
__author__ = "Alexis Solis"
