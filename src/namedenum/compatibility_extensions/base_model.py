from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from pydantic import BaseModel


def base_model(
    enum_cls: type,
    *,
    model_name: str | None = None,
    field_name: str = "value",
    default: Any = ...,
    nullable: bool = False,
    description: str | None = None,
) -> type[BaseModel]:
    """
    Create a pydantic BaseModel with a single field of type enum_cls.

    A str or int *default* is resolved to the canonical instance up front, so
    a bad default fails here rather than on first validation.
    """
    from pydantic import Field, create_model

    if isinstance(default, str):
        default = enum_cls.value_of(default)
    elif isinstance(default, int) and not isinstance(default, bool):
        default = enum_cls.from_ordinal(default)

    annotation: Any = Optional[enum_cls] if nullable else enum_cls
    field = Field(default, description=description)

    return create_model(
        model_name or f"{enum_cls.__name__}Model",
        **{field_name: (annotation, field)},
    )
