"""
Pytest configuration and fixtures for chipdex tests.
"""

import sys
from pathlib import Path
import pytest

# Add src directory to Python path to allow importing chipdex
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def chip_text() -> str:
    """Four chips: one multi-skill, one Mega, one with a blight, one without damage."""
    return "\n".join([
        "Airshot - Wind | Tech, Agility | Near | 1d10 damage | 1 hit.",
        "The target must pass an Agility check of [DC 10 + Tech] or be knocked back.",
        "Cannon - Null | Tech | Far | 4d6 damage | Mega | 1 hit.",
        "A heavy blast from an arm cannon.",
        "HeatShot - Fire | Tech | Far | 2d6 damage | 1 hit.",
        "Explodes on impact and inflicts blight (Fire).",
        "",
        "Recov10 - Recovery | -- | Self | -- | -- hits.",
        "Restores 10 HP.",
    ])


@pytest.fixture
def ncp_text() -> str:
    """NCPs in two colour sections, with a stray comment line."""
    return "\n".join([
        "White",
        "Undershirt (1 EB) - Reduces incoming damage by 1",
        "SuperArmor (3 EB) - Prevents flinching",
        "Pink",
        "HP+50 (2 EB) - Raises max HP by 50",
        "(this list is maintained by hand)",
    ])


@pytest.fixture
def virus_text() -> str:
    """Five viruses over three tiers; the Mettaur family spans all of them."""
    return "\n".join([
        "CR 1",
        "Mettaur (Elec)",
        "HP: 40 | AC: 12",
        "Mind: 4 | Body: 6 | Spirit: 2",
        "Tech: 2 | Agility: 1",
        "Abilities: None",
        "Drops: 1-90: Zenny | 91-100: Airshot",
        "A hard-hatted virus.",
        "It hides under its helmet.",
        "Bunny (Elec)",
        "HP: 30 | AC: 10",
        "Mind: 3 | Body: 3 | Spirit: 3",
        "None",
        "Abilities: Zap Ring, Hop",
        "Drops: None",
        "CR 2",
        "Canodumb (Null)",
        "HP: 60 | AC: 13",
        "Mind: 2 | Body: 5 | Spirit: 1",
        "Tech: 3",
        "Abilities: Cannon",
        "Drops: 1-100: Cannon",
        "Mettaur2 (Elec)",
        "HP: 80 | AC: 14",
        "Mind: 5 | Body: 7 | Spirit: 3",
        "Tech: 3 | Agility: 2",
        "Abilities: None",
        "Drops: 1-100: Zenny",
        "CR 3",
        "Mettaur3 (Elec)",
        "HP: 120 | AC: 15",
        "Mind: 6 | Body: 8 | Spirit: 4",
        "Tech: 4 | Agility: 3",
        "Abilities: Shockwave",
        "Drops: 1-100: Zenny",
        "The strongest of its line.",
    ])
