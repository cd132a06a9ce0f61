"""Segment rules recognising variable path segments."""

import re
from dataclasses import dataclass
from typing import Callable

PLACEHOLDER = ":id"


@dataclass(frozen=True)
class SegmentRule:
    """Matches a whole path segment that carries a per-request identifier."""

    name: str
    pattern: re.Pattern
    check: Callable[[str], bool] | None = None

    def matches(self, segment: str) -> bool:
        if not self.pattern.fullmatch(segment):
            return False
        return self.check(segment) if self.check else True


def _is_mixed_case(segment: str) -> bool:
    # an all-lowercase or all-uppercase run is an ordinary word, not an id
    return not (
        all(ch.islower() for ch in segment) or all(ch.isupper() for ch in segment)
    )


NUMERIC = SegmentRule("numeric", re.compile(r"[0-9]+"))
UUID = SegmentRule(
    "uuid",
    re.compile(
        r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    ),
)

DEFAULT_RULES: tuple[SegmentRule, ...] = (NUMERIC, UUID)

# Organisation-specific identifiers, enabled by name through configuration.
OPAQUE_RULES: dict[str, SegmentRule] = {
    rule.name: rule
    for rule in (
        # Salesforce record ids
        SegmentRule(
            "sfid",
            re.compile(r"[A-Za-z0-9]{18}|[A-Za-z0-9]{15}"),
            check=_is_mixed_case,
        ),
        # prefix, two-digit year, base32 counter: "WO220VLD"
        SegmentRule("project_reference", re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{4}")),
        SegmentRule("offer_number", re.compile(r"[0-9]+-[0-9]+")),
        SegmentRule("offer_extension_number", re.compile(r"[0-9]+-[0-9]+-[A-Z]+")),
    )
}


def custom_rule(regex: str) -> SegmentRule:
    """Build a rule from a configured regex; raises re.error when invalid."""
    return SegmentRule(f"custom:{regex}", re.compile(regex))
