"""Team schemas — boundary checks on name and description."""

import pytest
from pydantic import ValidationError

from tasktracker.schemas.team import TeamCreate, TeamUpdate


def test_name_shorter_than_three_rejected():
    with pytest.raises(ValidationError):
        TeamCreate(name="ab", member_emails=["a@example.com"])


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_name_left_for_manager(name):
    assert TeamCreate(name=name, member_emails=["a@example.com"]).name == name


def test_description_limit():
    with pytest.raises(ValidationError):
        TeamUpdate(description="x" * 1001)


def test_update_tracks_only_sent_fields():
    patch = TeamUpdate(name="Platform").model_dump(exclude_unset=True)
    assert patch == {"name": "Platform"}
