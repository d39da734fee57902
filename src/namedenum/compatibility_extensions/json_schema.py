from __future__ import annotations

from typing import Any, Dict, Literal

JsonSchema = Dict[str, Any]


def json_schema(
    enum_cls: type,
    *,
    by: Literal["name", "ordinal"] = "name",
    title: str | None = None,
    description: str | None = None,
    nullable: bool = False,
    openapi: bool = False,
) -> JsonSchema:
    """
    Build a JSON Schema (or OpenAPI 3.0) schema for an Enum class.

    Params:
      - by:
          * "name" (default): a string enum of the declared names
          * "ordinal": an integer enum of the ordinals
      - nullable: also accept null
      - openapi:
          * If True: emits OpenAPI 3.0-friendly shape (uses nullable: true)
          * If False: emits JSON Schema 2020-12 shape (type: [..., "null"])

    Raises AmbiguousNameError for a declaration with duplicate names and
    ValueError for an empty one.
    """
    ordinals = enum_cls.ordinals()
    if not ordinals:
        raise ValueError(f"{enum_cls!r} declares no names")

    if by == "name":
        json_type, values = "string", list(ordinals)
    elif by == "ordinal":
        json_type, values = "integer", list(ordinals.values())
    else:
        raise ValueError(f"by must be 'name' or 'ordinal', got {by!r}")

    schema: JsonSchema = {"title": title or enum_cls.__name__}
    if description:
        schema["description"] = description
    schema["type"] = json_type
    schema["enum"] = values

    if nullable:
        if openapi:
            schema["nullable"] = True
        else:
            schema["type"] = [json_type, "null"]
            schema["enum"] = values + [None]
    return schema
