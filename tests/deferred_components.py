"""Components whose annotations are strings, some of them unresolvable."""

from __future__ import annotations

import ctypes
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from sample_components import User


class Ledger:
    def add(self, amount: ctypes.c_int, owner: User) -> str:
        return f"added {amount}"

    def pick(self, value: int, owner: User) -> str:
        return f"picked {value}"

    def note(self, text: Optional[str], owner: User) -> str:
        return f"noted {text}"
