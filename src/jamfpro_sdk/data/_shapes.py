# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Mapping between request/response shapes and their JSON or XML wire form.

A shape is a plain :func:`dataclasses.dataclass`. Each field is written under
its own name unless the field metadata supplies a wire name for the format:

- ``metadata={"json": "totalCount"}`` renames the field in JSON bodies.
- ``metadata={"xml": "size"}`` renames the field in XML bodies. A ``>`` in the
  XML name nests the element inside a wrapper, e.g. ``"computers>computer"``
  writes each list item as ``<computers><computer>...</computer></computers>``.

The XML root element of a shape is its ``__xml_root__`` class attribute, or the
snake-cased class name. Fields whose value is ``None`` are omitted on encode.
On decode, missing fields keep their default (``None`` when they have none),
and list fields always decode to a list.

Example::

    @dataclass
    class Department:
        __xml_root__ = "department"

        id: Optional[int] = None
        name: Optional[str] = None
"""

from __future__ import annotations

import dataclasses
import functools
import re
import types
import typing
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Dict, List, Optional, Union

JSON = "json"
XML = "xml"

_UNION_TYPES = tuple(t for t in (Union, getattr(types, "UnionType", None)) if t is not None)
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def is_shape(tp: Any) -> bool:
    """True if ``tp`` is a dataclass type usable as a request/response shape."""
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def wire_name(f: dataclasses.Field, fmt: str) -> str:
    return f.metadata.get(fmt, f.name)


def xml_root_tag(shape: type) -> str:
    """Root element name for ``shape``."""
    return getattr(shape, "__xml_root__", None) or _CAMEL_RE.sub("_", shape.__name__).lower()


@functools.lru_cache(maxsize=None)
def _hints(shape: type) -> Dict[str, Any]:
    return typing.get_type_hints(shape)


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) in _UNION_TYPES:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
        return Any
    return tp


def _is_list(tp: Any) -> bool:
    return typing.get_origin(tp) in (list, List) or tp is list


def _list_item(tp: Any) -> Any:
    args = typing.get_args(tp)
    return args[0] if args else Any


def _is_required(f: dataclasses.Field) -> bool:
    return f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING


# ---------------------------------------------------------------- JSON


def to_json_value(obj: Any) -> Any:
    """Convert a shape instance (or nested containers of them) to JSON-serialisable values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out: Dict[str, Any] = {}
        for f in dataclasses.fields(obj):
            value = getattr(obj, f.name)
            if value is None:
                continue
            out[wire_name(f, JSON)] = to_json_value(value)
        return out
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_json_value(v) for v in obj]
    if isinstance(obj, dict):
        return {k: to_json_value(v) for k, v in obj.items()}
    return obj


def from_json_value(tp: Any, data: Any) -> Any:
    """
    Build a value of type ``tp`` from parsed JSON ``data``.

    :raises TypeError: If ``data`` does not fit the shape.
    :raises ValueError: If an enum or scalar value cannot be converted.
    """
    tp = _unwrap_optional(tp)
    if data is None:
        return None
    if tp is Any:
        return data
    if is_shape(tp):
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object for {tp.__name__}, got {type(data).__name__}")
        hints = _hints(tp)
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(tp):
            if not f.init:
                continue
            name = wire_name(f, JSON)
            if name in data:
                kwargs[f.name] = from_json_value(hints[f.name], data[name])
            elif _is_list(_unwrap_optional(hints[f.name])):
                kwargs[f.name] = []
            elif _is_required(f):
                kwargs[f.name] = None
        return tp(**kwargs)
    if _is_list(tp):
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        item = _list_item(tp)
        return [from_json_value(item, v) for v in data]
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(data)
    if tp is float and isinstance(data, int) and not isinstance(data, bool):
        return float(data)
    if tp in (str, int, bool, float) and not isinstance(data, tp):
        raise TypeError(f"expected {tp.__name__}, got {type(data).__name__}")
    return data


# ----------------------------------------------------------------- XML


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _append(parent: ET.Element, tag: str, value: Any) -> None:
    child = ET.SubElement(parent, tag)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        _fill(child, value)
    elif isinstance(value, dict):
        for key, item in value.items():
            _append_dict_item(child, key, item)
    else:
        child.text = _xml_text(value)


def _fill(parent: ET.Element, obj: Any) -> None:
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        *wrappers, leaf = wire_name(f, XML).split(">")
        target = parent
        for part in wrappers:
            found = target.find(part)
            target = found if found is not None else ET.SubElement(target, part)
        if isinstance(value, (list, tuple)):
            for item in value:
                _append(target, leaf, item)
        else:
            _append(target, leaf, value)


def _append_dict_item(parent: ET.Element, key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _append(parent, key, item)
    else:
        _append(parent, key, value)


def to_xml_element(obj: Any, tag: Optional[str] = None) -> ET.Element:
    """
    Render a shape instance, or a single-root ``dict``, as an XML element tree.

    :raises TypeError: If ``obj`` is neither a shape instance nor a single-key dict.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        root = ET.Element(tag or xml_root_tag(type(obj)))
        _fill(root, obj)
        return root
    if isinstance(obj, dict):
        if tag is None:
            if len(obj) != 1:
                raise TypeError("dict XML bodies must have exactly one root key")
            tag, obj = next(iter(obj.items()))
        root = ET.Element(tag)
        if isinstance(obj, dict):
            for key, value in obj.items():
                _append_dict_item(root, key, value)
        elif obj is not None:
            root.text = _xml_text(obj)
        return root
    raise TypeError(f"cannot render {type(obj).__name__} as XML")


def _scalar_from_text(tp: Any, elem: ET.Element) -> Any:
    raw = elem.text or ""
    text = raw.strip()
    if tp is str:
        return raw
    if tp is Any:
        return raw
    if not text:
        return None
    if tp is bool:
        lowered = text.lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        raise ValueError(f"invalid boolean value {text!r} in <{elem.tag}>")
    if tp is int:
        return int(text)
    if tp is float:
        return float(text)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(text)
    raise TypeError(f"unsupported XML field type {tp!r} for <{elem.tag}>")


def from_xml_element(tp: Any, elem: ET.Element) -> Any:
    """
    Build a value of type ``tp`` from an XML element.

    :raises TypeError: If the shape uses a field type with no XML mapping.
    :raises ValueError: If element text cannot be converted to the field type.
    """
    tp = _unwrap_optional(tp)
    if tp is ET.Element:
        return elem
    if not is_shape(tp):
        return _scalar_from_text(tp, elem)

    hints = _hints(tp)
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(tp):
        if not f.init:
            continue
        ftype = _unwrap_optional(hints[f.name])
        *wrappers, leaf = wire_name(f, XML).split(">")
        container: Optional[ET.Element] = elem
        for part in wrappers:
            container = container.find(part) if container is not None else None
        if _is_list(ftype):
            children = container.findall(leaf) if container is not None else []
            kwargs[f.name] = [from_xml_element(_list_item(ftype), c) for c in children]
            continue
        child = container.find(leaf) if container is not None else None
        if child is not None:
            kwargs[f.name] = from_xml_element(ftype, child)
        elif _is_required(f):
            kwargs[f.name] = None
    return tp(**kwargs)


__all__ = [
    "JSON",
    "XML",
    "is_shape",
    "wire_name",
    "xml_root_tag",
    "to_json_value",
    "from_json_value",
    "to_xml_element",
    "from_xml_element",
]
