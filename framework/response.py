import math
from typing import Any, Optional, Sequence
from pydantic import BaseModel

class ResponseModel(BaseModel):
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @staticmethod
    def success(data: Any = None, message: str = "success"):
        return {"code": 200, "message": message, "data": data}

    @staticmethod
    def fail(code: int = 400, message: str = "error", data: Any = None):
        return {"code": code, "message": message, "data": data}

    @staticmethod
    def paged(items: Sequence[Any], total_count: int, page: int, page_size: int):
        """Success envelope wrapping one page of items plus paging metadata."""
        total_pages = math.ceil(total_count / page_size) if page_size > 0 else 0
        return ResponseModel.success(data={
            "items": list(items),
            "total_count": total_count,
            "page": page,
            "page_size": page_size,
            "total_pages": total_pages,
            "has_next_page": page < total_pages,
            "has_previous_page": page > 1,
        })
