"""ShoppingItem domain entity: free-text item to buy with a completed flag."""
from typing import Optional


class ShoppingItem:
    def __init__(self, id: Optional[str] = None, text: str = "", completed: bool = False,
                 created_at: Optional[str] = None):
        self.id = id
        self.text = text
        self.completed = bool(completed)
        self.created_at = created_at

    def toggle(self):
        '''Flip the completed flag; applying it twice restores the original state.'''
        self.completed = not self.completed
        return self

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        return f"[{mark}] {self.text}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, ShoppingItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ShoppingItem(
            id=d.get("id"),
            text=d.get("text", "") or "",
            completed=bool(d.get("completed", False)),
            created_at=d.get("createdAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
        }
