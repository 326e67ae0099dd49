"""Ledger response envelope.

Every ledger RPC answers with:
{
    "code": 0,           // 0 = success, otherwise an error code
    "message": "success",
    "data": { ... }      // null on error
}
``code`` is required: a body without one is not an envelope. Extra fields
(timestamps, request ids) are ignored.
"""

from typing import Any

from pydantic import BaseModel

from src.bm_common.errors import EntityNotFoundError, RemoteError

SUCCESS_CODE = 0
NOT_FOUND_CODE = 2002


class ApiResponse(BaseModel):
    code: int
    message: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE

    def unwrap(self, operation: str) -> Any:
        """Return ``data``, or raise the RemoteError matching ``code``."""
        if self.ok:
            return self.data
        if self.code == NOT_FOUND_CODE:
            raise EntityNotFoundError(operation, self.message)
        raise RemoteError(operation, self.message, self.code)
