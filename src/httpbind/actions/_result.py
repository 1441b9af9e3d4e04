from dataclasses import dataclass
from typing import Optional

from ..models.errors import HttpBindError


@dataclass(frozen=True)
class ActionResult:
    """Outcome of applying one request action to a builder.

    A successful result carries no error. A failed one carries the error that
    aborted the action; ``raise_for_error`` re-raises it, much like
    ``httpx.Response.raise_for_status``.
    """

    error: Optional[HttpBindError] = None

    @classmethod
    def ok(cls) -> "ActionResult":
        return _OK

    @classmethod
    def failure(cls, error: HttpBindError) -> "ActionResult":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> "ActionResult":
        if self.error is not None:
            raise self.error
        return self


_OK = ActionResult()
