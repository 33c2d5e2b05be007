"""Merge classified file names into display groups."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from modelsift.models import VariantGroup, VariantLabel, VariantMember
from modelsift.variants.classifier import Classifier, classify

LOGGER = logging.getLogger(__name__)

_LABEL_ORDER = {VariantLabel.HIGH: 0, VariantLabel.LOW: 1}


def _member_order(member: VariantMember) -> tuple[int, int]:
    return _LABEL_ORDER.get(member.label, len(_LABEL_ORDER)), member.position


def group_variants(
    names: Iterable[str], classifier: Optional[Classifier] = None
) -> List[VariantGroup]:
    """Group High/Low halves of the same model, preserving first-seen order.

    Names without a variant label (or with an empty key) are never merged and
    come back as single-member groups at their own position.
    """
    classify_fn = classifier.classify if classifier is not None else classify
    groups: List[VariantGroup] = []
    by_key: Dict[str, VariantGroup] = {}

    for position, name in enumerate(names):
        result = classify_fn(name)
        member = VariantMember(name=name, position=position, label=result.variant_label)

        if not result.has_variant or not result.normalized_key:
            groups.append(VariantGroup(key=result.normalized_key, members=[member]))
            continue

        group = by_key.get(result.normalized_key)
        if group is None:
            group = VariantGroup(key=result.normalized_key)
            by_key[result.normalized_key] = group
            groups.append(group)
        group.members.append(member)

    for group in groups:
        group.members.sort(key=_member_order)

    LOGGER.debug("Grouped %d names into %d items", sum(len(g.members) for g in groups), len(groups))
    return groups
