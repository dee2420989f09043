"""
Custom UI widgets for the Narrator's Console.
"""
from .conversation import ConversationView
from .input_area import InputArea, StatusBar

__all__ = ["ConversationView", "InputArea", "StatusBar"]
