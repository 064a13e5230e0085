# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
from typing import Any, Optional

from sqlalchemy.types import TypeDecorator, Text


def canonical_dumps(value: Any) -> str:
    """Serialize a JSON value with sorted keys and no insignificant whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def loads(text: Optional[str]) -> Any:
    if text is None:
        return None
    return json.loads(text)


# 🧩 JSON value stored as canonical text, decoded back on load
class JSONEncodedText(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return canonical_dumps(value)
        return value

    def process_result_value(self, value, dialect):
        return loads(value)
