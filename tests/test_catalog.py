import json

import pytest
from pydantic import ValidationError

from shared.models import Condition
from yoga_recommendation.services import ExerciseCatalog


def test_default_catalog_contents(default_catalog):
    back_pain = default_catalog.entries_for(Condition.BACK_PAIN)

    assert [e.name for e in back_pain] == [
        "Cat-Cow Pose (Marjaryasana-Bitilasana)",
        "Child's Pose (Balasana)",
    ]
    assert len(default_catalog) == 37
    assert len(default_catalog.conditions()) == 15
    assert all(e.duration_seconds == 300 for e in back_pain)


def test_conditions_without_entries_resolve_to_empty(default_catalog):
    for condition in (Condition.HEART_DISEASE, Condition.ASTHMA, Condition.ALLERGIES):
        assert condition not in default_catalog
        assert default_catalog.entries_for(condition) == ()


def test_from_mapping_applies_defaults_and_condition(small_catalog):
    cat_cow, child = small_catalog.entries_for(Condition.BACK_PAIN)

    assert cat_cow.condition is Condition.BACK_PAIN
    assert cat_cow.duration_seconds == 300
    assert cat_cow.instructions == "Alternate arching."
    assert child.duration_seconds == 120
    assert len(small_catalog) == 3


def test_from_mapping_skips_metadata_and_unknown_keys():
    catalog = ExerciseCatalog.from_mapping(
        {
            "_comment": "ignored",
            "back_pain": [{"name": "Cat-Cow Pose"}],
            "sore_toes": [{"name": "Toe Stretch"}],
        }
    )

    assert catalog.conditions() == [Condition.BACK_PAIN]


def test_entries_are_immutable(small_catalog):
    entry = small_catalog.entries_for(Condition.STRESS)[0]

    with pytest.raises(ValidationError):
        entry.name = "Something Else"


def test_entry_name_must_not_be_blank():
    with pytest.raises(ValidationError):
        ExerciseCatalog.from_mapping({"stress": [{"name": "   "}]})


def test_from_file_reads_metadata_default_duration(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "_metadata": {"default_duration_seconds": 600},
                "catalog": {"insomnia": [{"name": "Legs Up The Wall"}]},
            }
        ),
        encoding="utf-8",
    )

    catalog = ExerciseCatalog.from_file(path)

    assert catalog.entries_for(Condition.INSOMNIA)[0].duration_seconds == 600


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ExerciseCatalog.from_file(tmp_path / "missing.json")
