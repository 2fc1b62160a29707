from __future__ import annotations

import pytest

from gradebook.models.component import MIN_CELLS, Component


def test_component_columns_are_fixed_positions_4_to_10():
    assert [c.column for c in Component] == [4, 5, 6, 7, 8, 9, 10]
    assert MIN_CELLS == 11


def test_component_field_names_used_in_diagnostics():
    assert [c.field_name for c in Component] == [
        "Quiz", "Mid-Sem", "Lab Test", "Weekly Labs", "Pre-Compre", "Compre", "Total (300)",
    ]
    assert Component.TOTAL.title == "Total"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("quiz", Component.QUIZ),
        ("midSem", Component.MID_SEM),
        ("MID_SEM", Component.MID_SEM),
        ("weeklylabs", Component.WEEKLY_LABS),
        ("precompre", Component.PRE_COMPRE),
        ("Lab Test", Component.LAB_TEST),
        ("Total (300)", Component.TOTAL),
        ("  compre ", Component.COMPRE),
    ],
)
def test_component_parse_accepts_keys_names_and_titles(name, expected):
    assert Component.parse(name) is expected


def test_component_parse_passes_through_members():
    assert Component.parse(Component.TOTAL) is Component.TOTAL


def test_component_parse_unknown_raises():
    with pytest.raises(ValueError) as e:
        Component.parse("attendance")
    assert "attendance" in str(e.value)


def test_consistency_parts_exclude_pre_compre():
    parts = Component.consistency_parts()
    assert Component.PRE_COMPRE not in parts
    assert Component.TOTAL not in parts
    assert len(parts) == 5
