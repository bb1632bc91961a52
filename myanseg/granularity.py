"""Granularity rules: merge syllables into word- or phrase-level units."""

import logging
from dataclasses import dataclass, replace
from typing import Literal, Optional

logger = logging.getLogger(__name__)

RuleType = Literal["adp", "plural", "tense", "adverbial", "negation", "participle"]
RuleMode = Literal["split", "merge"]
Preset = Literal["syllable", "word", "phrase"]

# Declaration order is the order merge passes run in
RULE_TYPES: tuple[str, ...] = (
    "adp",
    "plural",
    "tense",
    "adverbial",
    "negation",
    "participle",
)

NEGATION_MARKER = "မ"

# Trigger strings per rule (negation is positional, see NEGATION_MARKER)
GRAMMAR_PATTERNS: dict[str, frozenset[str]] = {
    "adp": frozenset({
        "က", "ကို", "မှာ", "တွင်", "၌", "သို့", "မှ", "နှင့်", "နဲ့",
        "ဖြင့်", "အတွက်", "ကြောင့်", "အား", "၏",
    }),
    "plural": frozenset({"များ", "တို့", "တွေ"}),
    "tense": frozenset({"သည်", "မည်", "ပြီ", "ခဲ့", "နေ", "ပါ", "ပြီး"}),
    "adverbial": frozenset({"စွာ"}),
    "negation": frozenset({NEGATION_MARKER}),
    "participle": frozenset({"သော", "သည့်", "မည့်", "ခဲ့သော", "နေသော"}),
}

RULE_LABELS: dict[str, str] = {
    "adp": "Postpositional Markers (ADP)",
    "plural": "Plural Markers",
    "tense": "Tense/Aspect Markers",
    "adverbial": "Adverbial Suffix",
    "negation": "Negation Grouping",
    "participle": "Relative Participle",
}

PRESETS: dict[str, dict[str, str]] = {
    "syllable": {
        "adp": "split",
        "plural": "split",
        "tense": "split",
        "adverbial": "split",
        "negation": "split",
        "participle": "split",
    },
    "word": {
        "adp": "split",
        "plural": "merge",
        "tense": "split",
        "adverbial": "merge",
        "negation": "merge",
        "participle": "split",
    },
    "phrase": {
        "adp": "merge",
        "plural": "merge",
        "tense": "merge",
        "adverbial": "merge",
        "negation": "merge",
        "participle": "merge",
    },
}


@dataclass(frozen=True)
class GranularityRule:
    """A linguistic category and whether its markers stay split or merge."""

    type: str
    label: str
    mode: str = "split"
    enabled: bool = True

    @property
    def patterns(self) -> frozenset[str]:
        return GRAMMAR_PATTERNS.get(self.type, frozenset())


def default_rules() -> list[GranularityRule]:
    """All six rules, enabled, in split mode."""
    return [GranularityRule(type=t, label=RULE_LABELS[t]) for t in RULE_TYPES]


def merge_pass(units: list[str], rule: GranularityRule) -> list[str]:
    """Apply one rule's merge to a unit sequence.

    Suffix rules fold a matching unit into the unit before it. The negation
    rule is a prefix: the marker absorbs the unit after it.
    """
    patterns = rule.patterns
    if not patterns:
        return units

    result: list[str] = []
    i = 0
    while i < len(units):
        unit = units[i]
        if rule.type == "negation":
            if unit == NEGATION_MARKER and i + 1 < len(units):
                result.append(unit + units[i + 1])
                i += 2
                continue
        elif i > 0 and unit in patterns:
            result[-1] = result[-1] + unit
            i += 1
            continue
        result.append(unit)
        i += 1

    return result


def resegment(units: list[str], rules: list[GranularityRule]) -> list[str]:
    """Merge syllable units according to the enabled merge-mode rules.

    Rules run one after another in the order given, each on the previous
    rule's output. Split-mode and disabled rules leave the sequence alone.

    Args:
        units: Syllable-level units
        rules: Rule set (normally in RULE_TYPES order)

    Returns:
        New unit list
    """
    if not units or not rules:
        return list(units)

    result = list(units)
    for rule in rules:
        if rule.enabled and rule.mode == "merge":
            result = merge_pass(result, rule)
    return result


class GranularityRuleEngine:
    """Holds the current rule set and the active preset marker."""

    def __init__(
        self,
        rules: Optional[list[GranularityRule]] = None,
        active_preset: Optional[str] = "syllable",
    ):
        self.rules = rules if rules is not None else default_rules()
        self.active_preset = active_preset

    @classmethod
    def from_config(cls, config) -> "GranularityRuleEngine":
        """Build an engine from a GranularityConfig (preset, then overrides)."""
        engine = cls()
        if config.preset:
            engine.apply_preset(config.preset)
        else:
            engine.active_preset = None
        for rule_type, override in config.rules.items():
            if override.mode is not None:
                engine.set_mode(rule_type, override.mode)
            if override.enabled is not None and override.enabled != engine.get_rule(rule_type).enabled:
                engine.toggle_enabled(rule_type)
        return engine

    def get_rule(self, rule_type: str) -> GranularityRule:
        for rule in self.rules:
            if rule.type == rule_type:
                return rule
        raise ValueError(f"Unknown granularity rule: {rule_type}")

    def _replace_rule(self, rule_type: str, **changes) -> None:
        self.get_rule(rule_type)
        self.rules = [
            replace(r, **changes) if r.type == rule_type else r for r in self.rules
        ]

    def apply_preset(self, name: str) -> None:
        """Set every rule's mode from a preset and enable all rules."""
        if name not in PRESETS:
            raise ValueError(f"Unknown granularity preset: {name}")
        preset = PRESETS[name]
        self.rules = [
            replace(r, mode=preset.get(r.type, r.mode), enabled=True) for r in self.rules
        ]
        self.active_preset = name
        logger.debug(f"Applied granularity preset: {name}")

    def set_mode(self, rule_type: str, mode: str) -> None:
        if mode not in ("split", "merge"):
            raise ValueError(f"Unknown rule mode: {mode}")
        self._replace_rule(rule_type, mode=mode)
        self.active_preset = None

    def toggle_enabled(self, rule_type: str) -> None:
        self._replace_rule(rule_type, enabled=not self.get_rule(rule_type).enabled)
        self.active_preset = None

    def active_rules(self) -> list[GranularityRule]:
        return [r for r in self.rules if r.enabled]

    def resegment(self, units: list[str]) -> list[str]:
        return resegment(units, self.rules)

    def to_dict(self) -> dict:
        return {
            "activePreset": self.active_preset,
            "rules": [
                {"type": r.type, "mode": r.mode, "enabled": r.enabled} for r in self.rules
            ],
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(preset={self.active_preset!r})"
