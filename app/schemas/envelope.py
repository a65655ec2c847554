from typing import Any, Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Envelope shared by every JSON endpoint: ``{ok, message, data}``.
    """

    ok: bool = True
    message: str
    data: DataT | None = None


def error_body(message: str, data: Any = None) -> dict[str, Any]:
    return {"ok": False, "message": message, "data": data}
