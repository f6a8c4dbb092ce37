from __future__ import annotations
from itertools import combinations
import pytest
from app.services.validation import (
    INVALID_EMAIL, INVALID_GITHUB, INVALID_YOUTUBE, MISSING_MEMBERS, MISSING_SDGS,
    REQUIRED_FIELDS, collect_errors, validate,
)


def _all_subsets(fields):
    for n in range(len(fields) + 1):
        yield from combinations(fields, n)


def test_valid_payload_passes(valid_payload):
    result = validate(valid_payload)
    assert result.ok
    assert result.errors == []
    assert result.request.team_name == "Byte Busters"
    assert result.request.unsdg_goals == ["SDG 2: Zero Hunger"]


@pytest.mark.parametrize("missing", list(_all_subsets(list(REQUIRED_FIELDS))))
def test_missing_required_fields_reported_in_order(valid_payload, missing):
    """Every subset of absent required fields yields exactly those display names, in rule order."""
    payload = {k: v for k, v in valid_payload.items() if k not in missing}
    expected = [name for field, name in REQUIRED_FIELDS.items() if field in missing]
    assert collect_errors(payload) == expected


@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
@pytest.mark.parametrize("missing", list(_all_subsets(list(REQUIRED_FIELDS))))
def test_blank_required_fields_reported_in_order(valid_payload, missing, blank):
    """Blank-after-trim counts as missing, with no extra format errors."""
    payload = {k: (blank if k in missing else v) for k, v in valid_payload.items()}
    expected = [name for field, name in REQUIRED_FIELDS.items() if field in missing]
    assert collect_errors(payload) == expected


def test_empty_payload_reports_everything():
    errors = validate({}).errors
    assert errors == list(REQUIRED_FIELDS.values()) + [MISSING_SDGS, MISSING_MEMBERS]
    assert len(errors) == 9


@pytest.mark.parametrize("payload", [None, [], "text", 42])
def test_non_object_payload_is_treated_as_empty(payload):
    assert len(validate(payload).errors) == 9


@pytest.mark.parametrize("email", ["nope", "a@b", "a@.com", "a b@example.org", "@example.org", "a@@example.org"])
def test_invalid_email_shapes(valid_payload, email):
    valid_payload["teamEmail"] = email
    assert validate(valid_payload).errors == [INVALID_EMAIL]


@pytest.mark.parametrize("email", ["team@example.org", "first.last@uni.ac.ug", "  team@example.org  "])
def test_valid_email_shapes(valid_payload, email):
    valid_payload["teamEmail"] = email
    assert validate(valid_payload).ok


@pytest.mark.parametrize("field", ["teamEmail", "youtubeLink", "githubRepo"])
def test_blank_formatted_field_reports_missing_only(valid_payload, field):
    valid_payload[field] = "   "
    assert validate(valid_payload).errors == [REQUIRED_FIELDS[field]]


@pytest.mark.parametrize("goals", [[], None, "SDG 4", {"a": 1}])
def test_sdg_required(valid_payload, goals):
    valid_payload["unsdgGoals"] = goals
    assert validate(valid_payload).errors == [MISSING_SDGS]


def test_sdg_missing_flagged_even_with_other_errors():
    errors = collect_errors({"teamEmail": "nope"})
    assert MISSING_SDGS in errors


def test_blank_members_rejected(valid_payload):
    valid_payload["teamMembers"] = ["", "  "]
    assert validate(valid_payload).errors == [MISSING_MEMBERS]


def test_one_real_member_is_enough(valid_payload):
    valid_payload["teamMembers"] = ["Alice", ""]
    assert validate(valid_payload).ok


@pytest.mark.parametrize("members", [None, "Alice", [], [None, 3]])
def test_members_must_be_a_list_of_names(valid_payload, members):
    valid_payload["teamMembers"] = members
    assert validate(valid_payload).errors == [MISSING_MEMBERS]


@pytest.mark.parametrize("link", ["https://www.youtube.com/watch?v=abc", "https://youtu.be/abc"])
def test_youtube_hosts_accepted(valid_payload, link):
    valid_payload["youtubeLink"] = link
    assert validate(valid_payload).ok


def test_bad_links(valid_payload):
    valid_payload["youtubeLink"] = "https://vimeo.com/123"
    valid_payload["githubRepo"] = "https://gitlab.com/x/y"
    assert validate(valid_payload).errors == [INVALID_YOUTUBE, INVALID_GITHUB]


def test_non_string_field_counts_as_missing(valid_payload):
    valid_payload["teamName"] = 123
    assert validate(valid_payload).errors == ["Team Name"]


def test_validation_does_not_mutate_payload(valid_payload):
    snapshot = dict(valid_payload)
    validate(valid_payload)
    assert valid_payload == snapshot
