"""High/Low noise variant detection for model file names.

A split model is usually published as two files whose names differ only by a
noise marker, e.g. ``wriggling_t2v_high_e100.safetensors`` and
``wriggling_t2v_low_e100.safetensors``. :func:`classify` reduces such names to
a shared normalized key plus a :class:`~modelsift.models.VariantLabel`.

Marker detection walks an ordered table of :class:`MarkerRule` entries and the
first matching rule wins. Every match of that rule is cut out of the name
before tokens are cleaned, so the marker never leaks into the key. Bare
numbers ahead of the marker are kept as part of the asset id. Trailing numbers
after it are treated as step counters.

Cleanup errs on the side of keeping segments: two distinct downloads sharing a
key would be merged by callers, which is worse than leaving a real pair apart.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from modelsift.config import DEFAULT_MODEL_EXTENSIONS
from modelsift.models import ClassificationResult, VariantLabel
from modelsift.utils.text import alnum_lower, split_name

LOGGER = logging.getLogger(__name__)

_SEPARATOR = r"[\s_\-.]*"

_COUNTER_RE = re.compile(r"\(\s*\d+\s*\)")
_ITERATION_RE = re.compile(r"^(?:e\d+|epoch?s?\d*|\d+(?:ep|epo|epoc|epoch|epochs))$")
_VERSION_RE = re.compile(r"^(?:v|ver|version)\d*$")
_SIZE_TAG_RE = re.compile(r"^\d+[bpk]$")
_STEP_COUNTER_RE = re.compile(r"^0\d{4,}$")


@dataclass(frozen=True, slots=True)
class MarkerRule:
    """A single entry of the marker table."""

    name: str
    pattern: re.Pattern[str]
    label: VariantLabel

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def split(self, text: str) -> tuple[str, str]:
        """Cut every match out of ``text``.

        Returns the part before the first match and the remainder, with each
        later match replaced by a space.
        """
        spans = [match.span() for match in self.pattern.finditer(text)]
        if not spans:
            return "", text
        head = text[: spans[0][0]]
        ends = [end for _, end in spans]
        starts = [start for start, _ in spans[1:]] + [len(text)]
        tail = " ".join(text[end:start] for end, start in zip(ends, starts))
        return head, tail


def _compound(word: str, label: VariantLabel) -> MarkerRule:
    # Flanks may be separators, digits or uppercase letters (``T2VHIGHNOISEJIGGLE``).
    pattern = re.compile(rf"(?<![a-z])(?i:{word}{_SEPARATOR}noise)(?![a-z])")
    return MarkerRule(f"{word}_noise", pattern, label)


def _word(word: str, label: VariantLabel) -> MarkerRule:
    pattern = re.compile(rf"(?<![A-Za-z])(?i:{word})(?![A-Za-z])")
    return MarkerRule(word, pattern, label)


def _token(word: str, label: VariantLabel) -> MarkerRule:
    pattern = re.compile(rf"(?<![A-Za-z0-9])(?i:{word})(?![A-Za-z0-9])")
    return MarkerRule(word, pattern, label)


def _camel_suffix(suffix: str, label: VariantLabel) -> MarkerRule:
    pattern = re.compile(rf"(?<=[a-z]){suffix}(?![A-Za-z0-9])")
    return MarkerRule(f"{suffix}_suffix", pattern, label)


DEFAULT_MARKER_RULES: tuple[MarkerRule, ...] = (
    _compound("high", VariantLabel.HIGH),
    _compound("low", VariantLabel.LOW),
    _word("high", VariantLabel.HIGH),
    _word("low", VariantLabel.LOW),
    _token("hn", VariantLabel.HIGH),
    _token("ln", VariantLabel.LOW),
    _camel_suffix("HN", VariantLabel.HIGH),
    _camel_suffix("LN", VariantLabel.LOW),
)


def _is_noise_token(token: str, label: Optional[VariantLabel]) -> bool:
    lowered = token.lower()
    if (
        _ITERATION_RE.match(lowered)
        or _VERSION_RE.match(lowered)
        or _SIZE_TAG_RE.match(lowered)
        or _STEP_COUNTER_RE.match(lowered)
    ):
        return True
    return label is not None and lowered == "noise"


def _trim_label_initial(token: str, label: Optional[VariantLabel]) -> str:
    """Drop a stray uppercase label initial glued to a camel-case word (``MommyH``)."""
    if label is None or len(token) <= 2:
        return token
    if token[-1] == label.value[0] and token[-2].islower():
        return token[:-1]
    return token


class Classifier:
    """Normalize file names into grouping keys and variant labels."""

    def __init__(
        self,
        rules: Sequence[MarkerRule] = DEFAULT_MARKER_RULES,
        *,
        extensions: Iterable[str] = DEFAULT_MODEL_EXTENSIONS,
    ) -> None:
        self.rules = tuple(rules)
        self.extensions = tuple(ext.lower() for ext in extensions)

    def classify(self, raw_name: str) -> ClassificationResult:
        source = self._strip_extension(raw_name.strip())
        if not source:
            return ClassificationResult("", None)

        rule = self.detect(source)
        label = rule.label if rule is not None else None
        head, tail = rule.split(source) if rule is not None else ("", source)

        key = self._build_key(head, tail, label)
        if not key:
            key = alnum_lower(head + tail)

        if label is None:
            LOGGER.debug("No variant marker in %r, key=%r", raw_name, key)
        return ClassificationResult(key, label)

    def detect(self, source: str) -> Optional[MarkerRule]:
        """Return the first rule in priority order that matches ``source``."""
        for rule in self.rules:
            if rule.matches(source):
                return rule
        return None

    def _strip_extension(self, name: str) -> str:
        lowered = name.lower()
        for ext in self.extensions:
            if lowered.endswith(ext) and len(name) > len(ext):
                return name[: -len(ext)]
        return name

    def _build_key(self, head: str, tail: str, label: Optional[VariantLabel]) -> str:
        # Everything before the marker is identity, including bare numbers.
        before = _clean_tokens(head, label)
        if before:
            before[-1] = _trim_label_initial(before[-1], label)

        # After the marker, bare numbers stay only when more name follows ("cshot_0_final").
        after: list[str] = []
        seen_letters = False
        for token in reversed(_clean_tokens(tail, label)):
            if token.isdigit():
                if not seen_letters:
                    continue
            elif any(char.isalpha() for char in token):
                seen_letters = True
            after.append(token)

        return alnum_lower("".join(before) + "".join(reversed(after)))


def _clean_tokens(text: str, label: Optional[VariantLabel]) -> list[str]:
    tokens = split_name(_COUNTER_RE.sub(" ", text))
    return [token for token in tokens if not _is_noise_token(token, label)]


_DEFAULT_CLASSIFIER = Classifier()


def classify(raw_name: str) -> ClassificationResult:
    """Classify ``raw_name`` with the default marker table."""
    return _DEFAULT_CLASSIFIER.classify(raw_name)
