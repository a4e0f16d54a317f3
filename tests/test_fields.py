"""
Tests for the closed enumerations used by records.
"""

import pytest

from chipdex.errors import FieldParseError
from chipdex.fields import (
    ChipCategory,
    Element,
    NCPColor,
    Range,
    RecordKind,
    Skill,
    SkillGroup,
)


class TestParsing:
    """Case-insensitive parsing of tokens into variants."""

    @pytest.mark.parametrize("token", ["Fire", "fire", "FIRE", "fIrE"])
    def test_element_is_case_insensitive(self, token):
        assert Element.parse(token) is Element.FIRE

    def test_unknown_token_fails(self):
        with pytest.raises(FieldParseError) as exc_info:
            Element.parse("Plasma")
        assert exc_info.value.field == "element"
        assert exc_info.value.token == "Plasma"

    def test_empty_token_fails(self):
        with pytest.raises(FieldParseError):
            Range.parse("")

    def test_surrounding_whitespace_is_not_trimmed(self):
        with pytest.raises(FieldParseError):
            Range.parse(" Near ")

    def test_field_parse_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ChipCategory.parse("Ultra")

    @pytest.mark.parametrize("enum_cls", [Element, Skill, Range, ChipCategory, NCPColor, RecordKind])
    def test_display_parses_back(self, enum_cls):
        for variant in enum_cls:
            assert enum_cls.parse(variant.display) is variant
            assert str(variant) == variant.display


class TestSkill:
    """Skill aliases, abbreviations and groups."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("TCH", Skill.TECH),
            ("tch", Skill.TECH),
            ("Coding", Skill.TECH),
            ("speed", Skill.AGILITY),
            ("Stamina", Skill.ENDURANCE),
            ("bravery", Skill.VALOR),
            ("AFF", Skill.AFFINITY),
            ("none", Skill.NONE),
            ("--", Skill.NONE),
            ("Varies", Skill.VARIES),
        ],
    )
    def test_aliases(self, token, expected):
        assert Skill.parse(token) is expected

    def test_abbreviations_are_three_letters(self):
        for skill in Skill:
            if skill is Skill.NONE:
                assert skill.abbreviation == "--"
            else:
                assert len(skill.abbreviation) == 3
                assert Skill.parse(skill.abbreviation) is skill

    def test_groups(self):
        assert Skill.SENSE.group is SkillGroup.MIND
        assert Skill.STRENGTH.group is SkillGroup.BODY
        assert Skill.CHARM.group is SkillGroup.SPIRIT
        assert Skill.NONE.group is None
        assert Skill.VARIES.group is None

    def test_unknown_skill_fails(self):
        with pytest.raises(FieldParseError):
            Skill.parse("Luck")


class TestElementOrder:
    def test_order_follows_declaration(self):
        assert Element.FIRE.order == 0
        assert Element.NULL.order == len(Element) - 1
        assert Element.AQUA.order < Element.ELEC.order


class TestNCPColor:
    @pytest.mark.parametrize("line", ["White", "  pink ", "GRAY"])
    def test_headers(self, line):
        assert NCPColor.is_header(line)

    @pytest.mark.parametrize("line", ["", "Undershirt (1 EB) - text", "Purple"])
    def test_non_headers(self, line):
        assert not NCPColor.is_header(line)


class TestRecordKind:
    def test_suffixes(self):
        assert RecordKind.CHIP.collision_suffix == "_c"
        assert RecordKind.NCP.collision_suffix == "_n"
        assert RecordKind.VIRUS.collision_suffix == "_v"

    def test_labels(self):
        assert RecordKind.CHIP.label == "BattleChip"
        assert RecordKind.NCP.label == "NCP"
        assert RecordKind.VIRUS.label == "Virus"
