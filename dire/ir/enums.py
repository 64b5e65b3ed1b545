"""
IR Enums - Rule ids, states and codes.

No stringly-typed constants scattered across rules.
"""

from enum import Enum


class RuleId(str, Enum):
    """
    The closed set of enrichment rules.

    Values are the stable ids used in option maps, profiles, the group tree
    and the HTTP/CLI surfaces. Application order is derived from these values
    (see `ordered`), never from selection order.
    """

    ABILITIES = "abilities"
    AOE = "AOE"
    ATTACKS = "attacks"
    AWARDS = "awards"
    CONDITIONS = "conditions"
    CREATURE_TYPE = "creatureType"
    DAMAGE = "damage"
    HEALING = "healing"
    PASSIVES = "passives"
    RULES = "rules"
    SAVES = "saves"
    SKILLS = "skills"
    SPELL_COMPONENTS = "spellComponents"
    SPELL_SCHOOL = "spellSchool"
    TOOLS = "tools"

    @classmethod
    def ordered(cls) -> list["RuleId"]:
        """All rule ids in application order (case-insensitive lexicographic)."""
        return sorted(cls, key=lambda r: (r.value.casefold(), r.value))

    @classmethod
    def from_string(cls, s: str) -> "RuleId":
        """
        Parse a rule id, ignoring case.

        Raises:
            ValueError: If no rule has that id
        """
        for rule_id in cls:
            if rule_id.value.casefold() == s.strip().casefold():
                return rule_id
        raise ValueError(f"Unknown rule id: {s!r}")


class VocabularyCategory(str, Enum):
    """Dataset categories the rules consult."""

    ABILITIES = "abilities"
    SKILLS = "skills"
    TOOLS = "tools"
    DAMAGE_TYPES = "damageTypes"
    CURRENCIES = "currencies"
    CONDITIONS = "conditions"
    CREATURE_TYPES = "creatureTypes"
    AREA_TARGET_TYPES = "areaTargetTypes"
    SPELL_SCHOOLS = "spellSchools"
    SPELL_COMPONENTS = "spellComponents"
    SPELL_TAGS = "spellTags"
    RULES = "rules"


class GroupState(str, Enum):
    """Tri-state of a group toggle derived from its children."""

    ALL = "all"
    NONE = "none"
    PARTIAL = "partial"


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class BatchStatus(str, Enum):
    """Outcome of an orchestration run."""

    CHANGED = "changed"
    UNCHANGED = "unchanged"
