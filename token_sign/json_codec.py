"""
JSON encode/decode for token headers and payloads.

Wraps the standard json module so that every failure surfaces as a
JsonError instead of a library specific exception, and adds the two
knobs token payloads need: a nesting depth limit and control over
integers that do not fit in 64 bits.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from token_sign.exceptions import JsonError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Deepest nesting the json module can parse or emit within the default
# interpreter recursion limit.
MAX_DEPTH_LIMIT = 512

DEPTH_EXCEEDED = "Maximum stack depth exceeded"
CIRCULAR_REFERENCE = "Circular reference detected"


@dataclass(frozen=True)
class JsonOptions:
    """
    Options shared by json_decode and json_encode.

    Attributes:
        max_depth: Maximum container nesting; a top-level object or array is depth 1.
            Must be between 1 and MAX_DEPTH_LIMIT
        preserve_big_integers_as_text: Keep integers outside the signed 64-bit
            range as exact decimal text instead of converting them to float.
            When converting, integers too large for a float are rejected
    """

    max_depth: int = 512
    preserve_big_integers_as_text: bool = True


DEFAULT_OPTIONS = JsonOptions()


def _resolve_options(options: Optional[JsonOptions]) -> JsonOptions:
    options = options or DEFAULT_OPTIONS
    if options.max_depth < 1:
        raise JsonError("Depth must be greater than zero")
    if options.max_depth > MAX_DEPTH_LIMIT:
        raise JsonError(f"Depth must not exceed {MAX_DEPTH_LIMIT}")
    return options


def _fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def _int_parser(preserve_as_text: bool):
    def parse(text: str) -> Union[int, float, str]:
        # 19 digits covers the whole int64 range; anything longer is out of it
        if len(text.lstrip("-")) <= 19:
            value = int(text)
            if _fits_int64(value):
                return value
        return text if preserve_as_text else _parse_float(text)

    return parse


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text[:32]}")
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON literal: {name}")


def _check_depth(value: Any, max_depth: int) -> None:
    stack = [(value, 1)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        if depth > max_depth:
            raise JsonError(DEPTH_EXCEEDED)
        stack.extend((child, depth + 1) for child in children)


def json_decode(text: Union[str, bytes], options: Optional[JsonOptions] = None) -> Any:
    """
    Parse JSON text.

    Args:
        text: JSON document; bytes must be UTF-8
        options: Depth limit and big integer handling (default: JsonOptions())

    Returns:
        The decoded value; objects become dicts and arrays lists

    Raises:
        JsonError: On syntax errors, NaN/Infinity literals, malformed UTF-8
            or nesting deeper than ``options.max_depth``
    """
    options = _resolve_options(options)
    try:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        result = json.loads(
            text,
            parse_int=_int_parser(options.preserve_big_integers_as_text),
            parse_float=_parse_float,
            parse_constant=_reject_constant,
        )
    except RecursionError as e:
        raise JsonError(DEPTH_EXCEEDED) from e
    except (ValueError, TypeError) as e:
        raise JsonError(str(e)) from e

    _check_depth(result, options.max_depth)
    return result


def _convert_scalar(value: Any, options: JsonOptions) -> Any:
    if (
        isinstance(value, int)
        and not isinstance(value, bool)
        and not options.preserve_big_integers_as_text
        and not _fits_int64(value)
    ):
        return float(value)
    return value


def _prepare(value: Any, options: JsonOptions) -> Any:
    """
    Copy ``value`` for serialization, enforcing depth and rejecting cycles.

    Walks with an explicit stack. An int on the stack is the id of a
    container whose children are all done and which leaves the current path.
    """
    holder = [None]
    path: set[int] = set()
    stack: list[Any] = [(holder, 0, value, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, int):
            path.discard(item)
            continue

        parent, slot, node, depth = item
        if not isinstance(node, (dict, list, tuple)):
            parent[slot] = _convert_scalar(node, options)
            continue

        marker = id(node)
        if marker in path:
            raise JsonError(CIRCULAR_REFERENCE)
        depth += 1
        if depth > options.max_depth:
            raise JsonError(DEPTH_EXCEEDED)

        path.add(marker)
        stack.append(marker)
        if isinstance(node, dict):
            copy: Any = dict.fromkeys(node)
            children = node.items()
        else:
            copy = [None] * len(node)
            children = enumerate(node)
        parent[slot] = copy
        stack.extend((copy, key, child, depth) for key, child in children)

    return holder[0]


def json_encode(value: Any, options: Optional[JsonOptions] = None) -> str:
    """
    Serialize a value to compact JSON text.

    Args:
        value: dicts, lists, tuples, strings, numbers, booleans and None
        options: Depth limit and big integer handling (default: JsonOptions())

    Returns:
        JSON text with non-ASCII characters escaped

    Raises:
        JsonError: On non-finite floats, cycles, unserializable objects or
            nesting deeper than ``options.max_depth``
    """
    options = _resolve_options(options)
    try:
        prepared = _prepare(value, options)
        return json.dumps(prepared, separators=(",", ":"), allow_nan=False)
    except JsonError:
        raise
    except RecursionError as e:
        raise JsonError(DEPTH_EXCEEDED) from e
    except (ValueError, TypeError, OverflowError) as e:
        raise JsonError(str(e)) from e
