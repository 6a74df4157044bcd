from .ids import Now, Uuid

OPERATIONS = [Uuid, Now]

__all__ = ["OPERATIONS", "Now", "Uuid"]
