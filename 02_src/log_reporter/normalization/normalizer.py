"""Path normalizer collapsing per-request identifiers into placeholders."""

from typing import Iterable, Protocol

from .rules import DEFAULT_RULES, OPAQUE_RULES, PLACEHOLDER, SegmentRule, custom_rule


class IPathNormalizer(Protocol):
    """Rewrites request paths into stable grouping templates."""

    def normalize(self, path: str) -> str:
        """Return the template for a raw request path."""
        ...


class PathNormalizer:
    """
    Segment-wise path normalizer.

    A segment is replaced with the placeholder when the first matching rule
    says it is an identifier; every other segment is kept verbatim. The
    query string is dropped. Segments already equal to the placeholder are
    left alone, so normalizing a template returns it unchanged.
    """

    def __init__(
        self,
        rules: Iterable[SegmentRule] = DEFAULT_RULES,
        placeholder: str = PLACEHOLDER,
    ):
        self._rules = tuple(rules)
        self._placeholder = placeholder

    @classmethod
    def from_names(
        cls,
        pattern_names: Iterable[str] = (),
        regexes: Iterable[str] = (),
    ) -> "PathNormalizer":
        """Build a normalizer with the default rules plus configured extras.

        Raises:
            KeyError: an unknown built-in rule name.
            re.error: an invalid custom regex.
        """
        rules = list(DEFAULT_RULES)
        rules.extend(OPAQUE_RULES[name] for name in pattern_names)
        rules.extend(custom_rule(regex) for regex in regexes)
        return cls(rules)

    @property
    def rules(self) -> tuple[SegmentRule, ...]:
        return self._rules

    def normalize(self, path: str) -> str:
        path = path.split("?", 1)[0]
        return "/".join(self._normalize_segment(s) for s in path.split("/"))

    def _normalize_segment(self, segment: str) -> str:
        if not segment or segment == self._placeholder:
            return segment
        for rule in self._rules:
            if rule.matches(segment):
                return self._placeholder
        return segment
