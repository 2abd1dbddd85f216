"""JSON responses for arbitrarily deep catalog trees.

FastAPI's default path serializes nested pydantic models recursively, which
breaks on service chains a few hundred levels deep. ``CatalogJSONResponse``
walks the payload with an explicit stack instead.
"""

from __future__ import annotations

import json
from typing import Any, List

from pydantic import BaseModel
from starlette.responses import JSONResponse


class _Token(str):
    """JSON punctuation that is emitted as-is."""


def encode_json(content: Any) -> bytes:
    out: List[str] = []
    stack: List[Any] = [content]
    while stack:
        item = stack.pop()
        if isinstance(item, _Token):
            out.append(item)
            continue
        if isinstance(item, BaseModel):
            item = {name: getattr(item, name) for name in type(item).model_fields}
        if isinstance(item, dict):
            entries = list(item.items())
            stack.append(_Token("}"))
            for index in range(len(entries) - 1, -1, -1):
                key, value = entries[index]
                stack.append(value)
                stack.append(_Token(("," if index else "") + json.dumps(str(key), ensure_ascii=False) + ":"))
            stack.append(_Token("{"))
        elif isinstance(item, (list, tuple)):
            stack.append(_Token("]"))
            for index in range(len(item) - 1, -1, -1):
                stack.append(item[index])
                if index:
                    stack.append(_Token(","))
            stack.append(_Token("["))
        else:
            # Scalars; str-based enums encode as their value
            out.append(json.dumps(item, ensure_ascii=False, default=str))
    return "".join(out).encode("utf-8")


class CatalogJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return encode_json(content)
