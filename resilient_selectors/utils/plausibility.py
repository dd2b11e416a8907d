from __future__ import annotations

import re

_CLASS_TOKEN_END = re.compile(r"[.\s:\[\]]")


def selector_shape(selector: str) -> str:
    if selector.startswith("#"):
        return "id"
    if selector.startswith("[") and selector.endswith("]"):
        return "attribute"
    if selector.startswith("."):
        return "class"
    return "other"


def leading_class_token(selector: str) -> str:
    """Returns the first class name of a class-shaped selector."""

    return _CLASS_TOKEN_END.split(selector[1:], maxsplit=1)[0]


def is_plausible(candidate: str, markup: str) -> bool:
    """Cheaply estimates whether ``candidate`` is present in ``markup``.

    Literal substring checks only; a false positive costs one extra
    resolution attempt.
    """

    shape = selector_shape(candidate)
    if shape == "id":
        element_id = candidate[1:]
        return f'id="{element_id}"' in markup or f"id='{element_id}'" in markup
    if shape == "attribute":
        return candidate[1:-1] in markup
    if shape == "class":
        token = leading_class_token(candidate)
        return bool(token) and token in markup
    return True
