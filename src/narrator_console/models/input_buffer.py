"""
Single-line input buffer with a cursor.
"""
from dataclasses import dataclass


@dataclass
class InputBuffer:
    """
    Editable text plus a cursor index.

    Every operation keeps ``0 <= cursor <= len(text)``.
    """
    text: str = ""
    cursor: int = 0

    def insert(self, character: str) -> None:
        self.text = self.text[:self.cursor] + character + self.text[self.cursor:]
        self.cursor += len(character)

    def backspace(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
            self.text = self.text[:self.cursor] + self.text[self.cursor + 1:]

    def delete(self) -> None:
        if self.cursor < len(self.text):
            self.text = self.text[:self.cursor] + self.text[self.cursor + 1:]

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def is_blank(self) -> bool:
        return not self.text.strip()

    def take(self) -> str:
        """Return the trimmed text and empty the buffer."""
        value = self.text.strip()
        self.clear()
        return value
