"""Core ModelSift data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class VariantLabel(str, Enum):
    """Noise level marker carried by one half of a split model."""

    HIGH = "High"
    LOW = "Low"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Grouping identity derived from a single file name."""

    normalized_key: str
    variant_label: Optional[VariantLabel] = None

    @property
    def has_variant(self) -> bool:
        return self.variant_label is not None


@dataclass(slots=True)
class VariantMember:
    """One file name taking part in a variant group."""

    name: str
    position: int
    label: Optional[VariantLabel]


@dataclass(slots=True)
class VariantGroup:
    """Files recognized as one logical item, ordered for display."""

    key: str
    members: List[VariantMember] = field(default_factory=list)

    @property
    def primary(self) -> VariantMember:
        return self.members[0]

    @property
    def labels(self) -> list[Optional[VariantLabel]]:
        return [member.label for member in self.members]

    @property
    def is_merged(self) -> bool:
        return len(self.members) > 1
