"""
Tests for the virus compendium parser.

Covers the stat block grammar, description assembly, record-level
rejection with resynchronisation, and the structural errors that abort
a whole parse.
"""

import pytest

from chipdex.errors import (
    MissingTierHeaderError,
    RecordParseError,
    StructuralError,
    TierOrderError,
    TruncatedRecordError,
)
from chipdex.fields import Element, Skill
from chipdex.models import Drop
from chipdex.parsers.viruses import (
    is_boundary,
    parse_abilities,
    parse_drops,
    parse_skill_bonuses,
    parse_tier_header,
    parse_virus_lines,
)
from chipdex.text import split_lines

METTAUR = [
    "CR 1",
    "Mettaur (Elec)",
    "HP: 40 | AC: 12",
    "Mind: 4 | Body: 6 | Spirit: 2",
    "Tech: 2 | Agility: 1",
    "Abilities: None",
    "Drops: 1-90: Zenny | 91-100: Airshot",
]

BUNNY = [
    "Bunny (Elec)",
    "HP: 30 | AC: 10",
    "Mind: 3 | Body: 3 | Spirit: 3",
    "None",
    "Abilities: Zap Ring",
    "Drops: None",
]


class TestMettaur:
    """The single-record example."""

    def test_fields(self):
        viruses, rejected = parse_virus_lines(METTAUR)

        assert rejected == []
        assert len(viruses) == 1
        mettaur = viruses[0]
        assert mettaur.name == "Mettaur"
        assert mettaur.tier == 1
        assert mettaur.element is Element.ELEC
        assert mettaur.hp == 40
        assert mettaur.ac == 12
        assert (mettaur.mind, mettaur.body, mettaur.spirit) == (4, 6, 2)
        assert mettaur.skills == {Skill.TECH: 2, Skill.AGILITY: 1}
        assert mettaur.abilities is None
        assert mettaur.drops == (Drop(condition="1-90", reward="Zenny"), Drop(condition="91-100", reward="Airshot"))
        assert mettaur.description == ""

    def test_render(self):
        mettaur = parse_virus_lines(METTAUR)[0][0]
        assert mettaur.render() == "\n".join([
            "Mettaur (Elec) - CR 1",
            "HP: 40 | AC: 12",
            "Mind: 4 | Body: 6 | Spirit: 2",
            "Tech: 2 | Agility: 1",
            "Abilities: None",
            "Drops: 1-90: Zenny | 91-100: Airshot",
        ])


class TestStream:
    """Tiers, descriptions and multiple records."""

    def test_sample_document(self, virus_text):
        viruses, rejected = parse_virus_lines(split_lines(virus_text))

        assert rejected == []
        tiers = {virus.name: virus.tier for virus in viruses}
        assert tiers == {"Mettaur": 1, "Bunny": 1, "Canodumb": 2, "Mettaur2": 2, "Mettaur3": 3}

    def test_description_lines_are_joined(self, virus_text):
        viruses, _ = parse_virus_lines(split_lines(virus_text))
        by_name = {virus.name: virus for virus in viruses}

        assert by_name["Mettaur"].description == "A hard-hatted virus.\nIt hides under its helmet."
        assert by_name["Bunny"].description == ""
        assert by_name["Mettaur3"].description == "The strongest of its line."

    def test_description_ending_in_parentheses(self):
        lines = [*METTAUR, "Fires its pickaxe (x2)", "Then hides.", "Comes back."]
        viruses, rejected = parse_virus_lines(lines)

        assert rejected == []
        assert viruses[0].description == "Fires its pickaxe (x2)\nThen hides.\nComes back."

    def test_description_naming_an_element_in_parentheses(self):
        lines = [*METTAUR, "Takes double damage from (Fire)", "Very shy."]
        viruses, rejected = parse_virus_lines(lines)

        assert rejected == []
        assert viruses[0].description == "Takes double damage from (Fire)\nVery shy."

    def test_parenthesised_description_before_next_virus(self):
        lines = [*METTAUR, "Guards with its helmet (Object)", *BUNNY]
        viruses, _ = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Mettaur", "Bunny"]
        assert viruses[0].description == "Guards with its helmet (Object)"

    def test_abilities_and_empty_skills(self, virus_text):
        viruses, _ = parse_virus_lines(split_lines(virus_text))
        bunny = next(virus for virus in viruses if virus.name == "Bunny")

        assert bunny.skills == {}
        assert bunny.abilities == ("Zap Ring", "Hop")
        assert bunny.drops == ()

    def test_tier_header_saturates(self):
        viruses, _ = parse_virus_lines(["CR 300", *METTAUR[1:]])
        assert viruses[0].tier == 255

    def test_equal_tier_headers_are_allowed(self):
        viruses, _ = parse_virus_lines([*METTAUR, "CR 1", *BUNNY])
        assert [virus.tier for virus in viruses] == [1, 1]


class TestRecordErrors:
    """A bad virus is rejected and parsing resumes at the next header."""

    def test_duplicate_skill(self):
        lines = [*METTAUR[:4], "Tech: 2 | Tech: 1", *METTAUR[5:], "Some description.", *BUNNY]
        viruses, rejected = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Bunny"]
        assert len(rejected) == 1
        assert rejected[0].first_line == "Mettaur (Elec)"
        assert rejected[0].lines[-1] == "Some description."

    def test_unknown_element(self):
        lines = ["CR 1", "Mettaur (Plasma)", *METTAUR[2:], *BUNNY]
        viruses, rejected = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Bunny"]
        assert len(rejected) == 1

    def test_malformed_drop(self):
        lines = [*METTAUR[:6], "Drops: Zenny", *BUNNY]
        viruses, rejected = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Bunny"]
        assert "drop" in rejected[0].reason

    def test_malformed_stat_line(self):
        lines = [METTAUR[0], METTAUR[1], "HP: lots | AC: 12", *METTAUR[3:], *BUNNY]
        viruses, rejected = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Bunny"]
        assert len(rejected) == 1

    def test_stray_line_where_header_expected(self):
        lines = ["CR 1", "stray text", *BUNNY]
        viruses, rejected = parse_virus_lines(lines)

        assert [virus.name for virus in viruses] == ["Bunny"]
        assert rejected[0].lines == ["stray text"]


class TestStructuralErrors:
    """Errors that abort the whole parse."""

    def test_missing_tier_header(self):
        with pytest.raises(MissingTierHeaderError):
            parse_virus_lines(METTAUR[1:])

    def test_empty_text(self):
        with pytest.raises(MissingTierHeaderError):
            parse_virus_lines([])

    def test_truncated_stat_block(self):
        with pytest.raises(TruncatedRecordError) as exc_info:
            parse_virus_lines(METTAUR[:4])
        assert exc_info.value.line == "Mettaur (Elec)"

    def test_header_at_end_of_text(self):
        with pytest.raises(TruncatedRecordError):
            parse_virus_lines([*METTAUR, "Bunny (Elec)"])

    def test_tier_going_backwards(self):
        with pytest.raises(TierOrderError):
            parse_virus_lines(["CR 2", *METTAUR[1:], "CR 1", *BUNNY])

    def test_structural_errors_are_not_record_errors(self):
        with pytest.raises(StructuralError) as exc_info:
            parse_virus_lines(METTAUR[:3])
        assert not isinstance(exc_info.value, RecordParseError)


class TestLineHelpers:
    def test_tier_header(self):
        assert parse_tier_header("CR 4") == 4
        assert parse_tier_header("  CR 12  ") == 12
        assert parse_tier_header("CR four") is None
        assert parse_tier_header("Mettaur (Elec)") is None

    def test_boundaries(self):
        lines = ["CR 1", *METTAUR[1:], "A hard-hatted virus.", "Bunny (Elec)", "HP: 30 | AC: 10"]

        assert is_boundary(lines, 0)
        assert is_boundary(lines, 1)
        assert not is_boundary(lines, 2)
        assert not is_boundary(lines, 7)
        assert is_boundary(lines, 8)

    def test_parenthesised_description_text_is_not_a_boundary(self):
        lines = ["Fires its pickaxe (x2)", "Then hides.", "Weak to (Wood)", "Shy."]
        assert not any(is_boundary(lines, index) for index in range(len(lines)))

    def test_last_line_needs_a_real_element(self):
        assert is_boundary(["Bunny (Elec)"], 0)
        assert not is_boundary(["Swings twice (x2)"], 0)

    def test_skill_bonuses(self):
        assert parse_skill_bonuses("Sense: -1 | STR: +2") == {Skill.SENSE: -1, Skill.STRENGTH: 2}

    def test_skill_bonus_aliases_collide(self):
        with pytest.raises(RecordParseError):
            parse_skill_bonuses("Tech: 1 | TCH: 2")

    def test_abilities(self):
        assert parse_abilities("Abilities: None") is None
        assert parse_abilities("Abilities: Cannon, Guard") == ("Cannon", "Guard")
        with pytest.raises(RecordParseError):
            parse_abilities("Powers: Cannon")

    def test_drops(self):
        assert parse_drops("Drops: None") == ()
        assert parse_drops("Drops: 1-50: 100 Zenny") == (Drop(condition="1-50", reward="100 Zenny"),)
        with pytest.raises(RecordParseError):
            parse_drops("Loot: 1-50: Zenny")
