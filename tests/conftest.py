"""
Shared fixtures for DIRE tests.
"""

import pytest

from dire.core.engine import Enricher
from dire.core.logging import configure_logging
from dire.vocabulary.loader import get_vocabulary
from dire.vocabulary.resolver import VocabularyResolver


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of rewrite logs."""
    configure_logging(level="silent", force=True)


@pytest.fixture
def vocabulary():
    return get_vocabulary()


@pytest.fixture
def resolver(vocabulary):
    return VocabularyResolver(vocabulary)


@pytest.fixture
def enricher(vocabulary):
    return Enricher(vocabulary)


# Narrative snippets exercising every rule at least once
SAMPLE_TEXTS = [
    "Make a DC 15 Strength check.",
    "Succeed on a DC 12 Dexterity (Stealth or Acrobatics) check to sneak past.",
    "A DC 15 Dexterity (Thieves' Tools) check opens the lock.",
    "Guards have a passive Wisdom (Perception) score of 14.",
    "It has a passive Perception score of 12.",
    "Each creature must make a DC 13 Constitution saving throw.",
    "Hit: 7 (1d8 + 3) piercing damage plus 2d6 fire damage.",
    "The potion restores 2d4 + 2 hit points and 1d10 temporary hit points.",
    "Melee Weapon Attack: +5 to hit, reach 5 ft.",
    "The chest holds 250 gp each and the party earns 100 xp.",
    "On a failure the target is Blinded. Later, it is still Blinded.",
    "A 15-foot Cone of frost. The Beast is a Humanoid ally.",
    "Components: Verbal, Somatic, Material. Concentration, up to 1 minute.",
    "3rd-level Evocation. You have Advantage while behind Half Cover.",
    "<p>Nothing to enrich here.</p>",
]


@pytest.fixture
def sample_texts():
    return list(SAMPLE_TEXTS)
