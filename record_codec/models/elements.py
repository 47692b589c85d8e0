"""Call-scoped working models.

- ``ExtractedElement``: a raw string pulled from a source representation
  together with where it came from.
- ``ExclusivityClaims``: which field currently owns each exclusivity group
  during one marshal call.

Both are created fresh per call and never outlive it.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ExtractedElement:
    """Raw value plus provenance.

    Attributes:
        value: The raw string (prefix already stripped).
        found: ``False`` when the source had no element for the field.
        index: Ordinal index in a line payload, if the value came from one.
        prefix: Prefix that matched, for prefixed line elements.
        key: JSON key, for flat JSON elements.
    """

    value: str = ""
    found: bool = True
    index: int | None = None
    prefix: str = ""
    key: str = ""

    @classmethod
    def missing(cls) -> ExtractedElement:
        return cls(value="", found=False)


@dataclass(slots=True)
class ExclusivityClaims:
    """Group key → claiming field name for one marshal call."""

    _claims: dict[str, str] = field(default_factory=dict)

    def is_claimed_by_other(self, group: str, field_name: str) -> bool:
        owner = self._claims.get(group)
        return owner is not None and owner != field_name

    def claim(self, group: str, field_name: str) -> None:
        self._claims.setdefault(group, field_name)

    def release(self, group: str, field_name: str) -> None:
        """Release *group* if *field_name* holds it; other owners are untouched."""
        if self._claims.get(group) == field_name:
            del self._claims[group]

    def owner(self, group: str) -> str | None:
        return self._claims.get(group)
