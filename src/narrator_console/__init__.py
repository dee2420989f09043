"""
The Narrator's Console: a terminal chat with an absurdist, fourth-wall-aware narrator.
"""

__version__ = "0.1.0"
