"""
Attribute matching rules keyed by (subject role, candidate role).

Each rule compares one subject attribute with one candidate attribute; on a
match it adds a fixed weight and a reason string. Rules are evaluated
independently and their weights summed.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..schema.profile import Profile, Role, attribute_values


@dataclass(frozen=True)
class AttributeRule:
    """One attribute comparison worth ``weight`` when it matches."""
    subject_attr: str
    candidate_attr: str
    weight: float
    reason: str
    match: str = "overlap"


def _slug_prefix(value: str) -> str:
    return value.split("-")[0].casefold()


def match_overlap(subject_value: Any, candidate_value: Any) -> Optional[str]:
    """
    Case-insensitive intersection of two scalar-or-list values.

    Returns:
        The candidate's matching values joined by ", ", or None
    """
    wanted = {v.casefold() for v in attribute_values(subject_value)}
    if not wanted:
        return None
    hits = [v for v in attribute_values(candidate_value) if v.casefold() in wanted]
    if not hits:
        return None
    return ", ".join(dict.fromkeys(hits))


def match_slug_prefix(subject_value: Any, candidate_value: Any) -> Optional[str]:
    """Match slugs sharing the segment before the first hyphen."""
    subject_slugs = attribute_values(subject_value)
    candidate_slugs = attribute_values(candidate_value)
    if not subject_slugs or not candidate_slugs:
        return None
    prefix = _slug_prefix(subject_slugs[0])
    if prefix and prefix == _slug_prefix(candidate_slugs[0]):
        return candidate_slugs[0]
    return None


MATCHERS = {
    "overlap": match_overlap,
    "slug_prefix": match_slug_prefix,
}


DEFAULT_RULES: Tuple[AttributeRule, ...] = (
    AttributeRule("industry", "industry", 3.0, "Same industry: {value}"),
    AttributeRule("stage", "stage", 2.0, "Same stage: {value}"),
    AttributeRule("location", "location", 1.5, "Same location: {value}"),
    AttributeRule("slug", "slug", 1.0, "Similar slug", match="slug_prefix"),
)

ROLE_RULES: Dict[Tuple[Role, Role], Tuple[AttributeRule, ...]] = {
    (Role.STARTUP, Role.MENTOR): (
        AttributeRule("industry", "industry", 3.0, "Same industry: {value}"),
        AttributeRule("industry", "expertise_tags", 3.0, "Expertise in {value}"),
        AttributeRule("location", "location", 1.5, "Same location: {value}"),
    ),
    (Role.STARTUP, Role.INVESTOR): (
        AttributeRule("industry", "sectors", 3.0, "Invests in {value}"),
        AttributeRule("funding_stage", "investment_stages", 2.5, "Invests at {value} stage"),
        AttributeRule("industry", "industry", 2.0, "Same industry: {value}"),
        AttributeRule("location", "geographic_focus", 1.5, "Focuses on {value}"),
        AttributeRule("location", "location", 1.0, "Same location: {value}"),
    ),
    (Role.MENTOR, Role.STARTUP): (
        AttributeRule("industry", "industry", 3.0, "Same industry: {value}"),
        AttributeRule("expertise_tags", "industry", 2.5, "Matches your expertise: {value}"),
        AttributeRule("location", "location", 1.5, "Same location: {value}"),
    ),
    (Role.INVESTOR, Role.STARTUP): (
        AttributeRule("investment_stages", "funding_stage", 3.0, "Raising at {value} stage"),
        AttributeRule("sectors", "industry", 3.0, "In your sector: {value}"),
        AttributeRule("industry", "industry", 2.0, "Same industry: {value}"),
        AttributeRule("geographic_focus", "location", 1.5, "In your geographic focus: {value}"),
        AttributeRule("location", "location", 1.0, "Same location: {value}"),
    ),
}


def rules_for(
    subject_role: Optional[Role],
    candidate_role: Role,
    table: Optional[Dict[Tuple[Role, Role], Tuple[AttributeRule, ...]]] = None,
) -> Tuple[AttributeRule, ...]:
    """Rules for a role pair, or the generic rules when the pair has none."""
    table = ROLE_RULES if table is None else table
    if subject_role is None:
        return DEFAULT_RULES
    return table.get((subject_role, candidate_role), DEFAULT_RULES)


def evaluate_rules(
    rules: Iterable[AttributeRule],
    subject_attrs: Dict[str, Any],
    candidate_attrs: Dict[str, Any],
) -> Tuple[float, List[str]]:
    """
    Sum the weights of all matching rules.

    Returns:
        Tuple of (score, reasons), reasons in rule order
    """
    score = 0.0
    reasons: List[str] = []
    for rule in rules:
        matcher = MATCHERS[rule.match]
        value = matcher(subject_attrs.get(rule.subject_attr), candidate_attrs.get(rule.candidate_attr))
        if value is None:
            continue
        score += rule.weight
        reasons.append(rule.reason.format(value=value))
    return score, reasons


def score_profile(
    subject: Optional[Profile],
    candidate: Profile,
    table: Optional[Dict[Tuple[Role, Role], Tuple[AttributeRule, ...]]] = None,
) -> Tuple[float, List[str]]:
    """Attribute score of ``candidate`` for ``subject``; 0 without a subject profile."""
    if subject is None:
        return 0.0, []
    rules = rules_for(subject.role, candidate.role, table)
    return evaluate_rules(rules, subject.attributes, candidate.attributes)
