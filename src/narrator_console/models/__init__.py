"""
Data models for the Narrator's Console.
"""
from .input_buffer import InputBuffer
from .turn import Role, Transcript, Turn

__all__ = ["InputBuffer", "Role", "Transcript", "Turn"]
