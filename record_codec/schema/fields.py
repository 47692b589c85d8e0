"""Declaring descriptor tags on dataclass fields.

Tags live in ``dataclasses.field(metadata={"codec": {...}})`` as raw
strings, exactly as the descriptor parser reads them.  ``codec_field``
builds that metadata from keyword arguments::

    @dataclass
    class Order:
        code: str = codec_field(default="", pos=0, type_class="AN", size="3..3", req=True)
        qty: int = codec_field(default=0, pos=1, type_class="N", value_range="0..100")

Raw tag keys: ``pos``, ``name``, ``type``, ``regex``, ``size``, ``range``,
``req``, ``getter``, ``setter``, ``validate``, ``def``, ``booltrue``,
``boolfalse``, ``timeformat``, ``outprefix``, ``uniqueid``, ``skipblank``,
``skipzero``, ``zeroblank``, ``exclude``.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from record_codec.core.constants import METADATA_KEY


def _tag(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def codec_field(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    pos: int | str | None = None,
    name: str | None = None,
    type_class: str | None = None,
    regex: str | None = None,
    size: int | str | None = None,
    value_range: int | str | None = None,
    req: bool | None = None,
    getter: str | None = None,
    setter: str | None = None,
    validate: str | None = None,
    default_literal: object = None,
    bool_true: str | None = None,
    bool_false: str | None = None,
    time_format: str | None = None,
    out_prefix: str | None = None,
    unique_id: str | None = None,
    skip_blank: bool | None = None,
    skip_zero: bool | None = None,
    zero_blank: bool | None = None,
    exclude: bool | None = None,
    metadata: dict[str, Any] | None = None,
) -> Any:
    """Return a ``dataclasses.field`` carrying codec tags.

    Arguments left as ``None`` produce no tag.  ``default`` /
    ``default_factory`` are the dataclass defaults; ``default_literal`` is
    the codec's ``def`` tag injected for empty values.
    """
    raw = {
        "pos": pos,
        "name": name,
        "type": type_class,
        "regex": regex,
        "size": size,
        "range": value_range,
        "req": req,
        "getter": getter,
        "setter": setter,
        "validate": validate,
        "def": default_literal,
        "booltrue": bool_true,
        "boolfalse": bool_false,
        "timeformat": time_format,
        "outprefix": out_prefix,
        "uniqueid": unique_id,
        "skipblank": skip_blank,
        "skipzero": skip_zero,
        "zeroblank": zero_blank,
        "exclude": exclude,
    }
    tags = {key: _tag(value) for key, value in raw.items() if value is not None}

    merged: dict[str, Any] = dict(metadata or {})
    merged[METADATA_KEY] = tags
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=merged,
    )
