"""
Subject registry: owns the mapping table and resolves canonical names.

Resolution runs two passes over the table in order. The first pass looks for
an exact match between the normalized input and a normalized variant or
alias; the second accepts substring containment in either direction. The
first mapping satisfying a pass wins, so table order is the tie-break.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from unimaz.config import get_settings
from unimaz.models.subjects import SubjectMapping, UniversitySubjectConfig
from unimaz.services.subject_matcher import contains_either_way
from unimaz.utils.normalizers import normalize_subject_name
from unimaz.utils.subject_mappings import GLOBAL_SUBJECT_MAPPINGS, UNIVERSITY_CONFIGS

logger = logging.getLogger(__name__)

MappingLike = Union[SubjectMapping, Mapping[str, Any]]


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


class SubjectRegistry:
    """Ordered, mutable table of SubjectMapping entries."""

    def __init__(
        self,
        mappings: Optional[Iterable[MappingLike]] = None,
        min_containment_length: int = 0,
    ) -> None:
        self.min_containment_length = min_containment_length
        self._mappings: List[SubjectMapping] = []
        # canonical name -> normalized variants + aliases, in table order
        self._candidates: Dict[str, List[str]] = {}
        if mappings is not None:
            self.load(mappings)

    @property
    def mappings(self) -> List[SubjectMapping]:
        return list(self._mappings)

    def load(self, mappings: Iterable[MappingLike]) -> None:
        """Replace the table. Duplicate canonical names are merged."""
        self._mappings = []
        self._candidates = {}
        for mapping in mappings:
            self.merge(mapping)

    def merge(self, mapping: MappingLike) -> SubjectMapping:
        """Add a mapping, or union its variants and aliases into an existing one."""
        new = mapping if isinstance(mapping, SubjectMapping) else SubjectMapping.model_validate(mapping)
        new = new.model_copy(
            update={
                "variants": _unique(new.variants),
                "aliases": _unique(normalize_subject_name(a) for a in new.aliases if a.strip()),
            }
        )

        for index, existing in enumerate(self._mappings):
            if existing.canonical_name == new.canonical_name:
                merged = existing.model_copy(
                    update={
                        "variants": _unique([*existing.variants, *new.variants]),
                        "aliases": _unique([*existing.aliases, *new.aliases]),
                        "lesson_type": existing.lesson_type or new.lesson_type,
                    }
                )
                self._mappings[index] = merged
                self._candidates[merged.canonical_name] = self._build_candidates(merged)
                logger.debug("Merged subject mapping %s", merged.canonical_name)
                return merged

        self._mappings.append(new)
        self._candidates[new.canonical_name] = self._build_candidates(new)
        return new

    @staticmethod
    def _build_candidates(mapping: SubjectMapping) -> List[str]:
        normalized = [normalize_subject_name(v) for v in mapping.variants]
        return [c for c in _unique([*normalized, *mapping.aliases]) if c]

    def canonical_names(self) -> List[str]:
        return [m.canonical_name for m in self._mappings]

    def variants_for(self, canonical_name: str) -> List[str]:
        """Variants of a canonical subject; empty list if unknown."""
        for mapping in self._mappings:
            if mapping.canonical_name == canonical_name:
                return list(mapping.variants)
        return []

    def resolve_canonical(self, subject: str) -> Optional[str]:
        """Canonical name for a raw subject string, or None."""
        normalized = normalize_subject_name(subject)
        if not normalized:
            return None

        for mapping in self._mappings:
            if normalized in self._candidates[mapping.canonical_name]:
                return mapping.canonical_name

        for mapping in self._mappings:
            for candidate in self._candidates[mapping.canonical_name]:
                if contains_either_way(normalized, candidate, self.min_containment_length):
                    return mapping.canonical_name

        return None

    def are_equivalent(self, first: str, second: str) -> bool:
        """Both names resolve, and to the same canonical subject.

        Two unresolved names are never equivalent.
        """
        canonical1 = self.resolve_canonical(first)
        canonical2 = self.resolve_canonical(second)
        if canonical1 is None or canonical2 is None:
            return False
        return canonical1 == canonical2

    def comparison_key(self, subject: str) -> str:
        """Lowercased canonical name when resolvable, else the normalized name."""
        canonical = self.resolve_canonical(subject)
        if canonical is not None:
            return normalize_subject_name(canonical)
        return normalize_subject_name(subject)


def get_university_subject_mappings(university_id: int) -> List[SubjectMapping]:
    """Mappings configured for a university, falling back to the global table."""
    for raw in UNIVERSITY_CONFIGS:
        config = UniversitySubjectConfig.model_validate(raw)
        if config.university_id == university_id:
            return config.subject_mappings
    return [SubjectMapping.model_validate(m) for m in GLOBAL_SUBJECT_MAPPINGS]


@lru_cache
def get_subject_registry() -> SubjectRegistry:
    """Shared registry loaded from the global mapping table.

    Tests and embedders that need isolation should build their own
    SubjectRegistry instead.
    """
    settings = get_settings()
    return SubjectRegistry(
        GLOBAL_SUBJECT_MAPPINGS,
        min_containment_length=settings.min_containment_length,
    )
