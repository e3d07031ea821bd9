"""
Method name collision resolution

Odin vtable structs are flattened through `using`, so a method that reuses an
inherited name needs a numeric suffix to stay addressable.
"""

from dataclasses import dataclass
from typing import Iterable


def resolve_name_collision(name: str, names: set[str]) -> str:
    """Get a unique name and record it as used

    Examples (names = {'GetSize'}):
        GetSize -> GetSize1
        GetDpi -> GetDpi
    """
    resolved = name
    idx = 0
    while resolved in names:
        idx += 1
        resolved = f'{name}{idx}'
    names.add(resolved)
    return resolved


@dataclass(frozen=True)
class Rename:
    """A method that got a new slot name"""
    interface: str
    method: str
    new_name: str

    def __str__(self) -> str:
        return f'Renamed {self.interface}.{self.method} to {self.new_name}'


class MethodNameScope:
    """Slot names already taken in one interface's flattened vtable"""

    def __init__(self):
        self.names: set[str] = set()
        self.renames: list[Rename] = []

    def seed(self, slot_names: Iterable[str]):
        """Reserve the slot names the ancestors' vtables already hold"""
        self.names.update(slot_names)

    def claim(self, interface_name: str, method_name: str) -> str:
        """Get the slot name for an own method"""
        resolved = resolve_name_collision(method_name, self.names)
        if resolved != method_name:
            self.renames.append(Rename(interface_name, method_name, resolved))
        return resolved
