"""Caller identity resolution.

Every unit of work and every event is stamped with the function, file and
line it was issued from. Resolution goes through the ``CallerResolver``
protocol so stack inspection can be swapped out, e.g. for a fixed identity
where frames are unavailable.
"""

import sys
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class CallerIdentity(BaseModel):
    """Where a call came from."""

    model_config = ConfigDict(frozen=True)

    function: str = ""
    file: str = ""
    line: int = 0

    @classmethod
    def blank(cls) -> "CallerIdentity":
        """Identity used when the stack cannot be inspected."""
        return cls()


class CallerResolver(Protocol):
    """Resolves the identity of a frame ``skip`` levels above the caller of ``resolve``."""

    def resolve(self, skip: int) -> CallerIdentity:
        ...


class FrameResolver:
    """
    Stack-walking resolver.

    ``resolve(0)`` names the function that called ``resolve``, ``resolve(1)``
    its caller, and so on. Function names are ``module.QualName``. A depth
    beyond the top of the stack yields ``CallerIdentity.blank()``.
    """

    def resolve(self, skip: int) -> CallerIdentity:
        try:
            frame = sys._getframe(skip + 1)
        except ValueError:
            return CallerIdentity.blank()

        code = frame.f_code
        module = frame.f_globals.get("__name__")
        function = f"{module}.{code.co_qualname}" if module else code.co_qualname
        return CallerIdentity(function=function, file=code.co_filename, line=frame.f_lineno)


class StaticResolver:
    """Resolver that always returns the same identity."""

    def __init__(self, identity: CallerIdentity):
        self.identity = identity

    def resolve(self, skip: int) -> CallerIdentity:
        return self.identity
