import pytest

from contactsheet.errors import DataParseError
from contactsheet.intake.parsing import (
    JsonBody,
    NamedParams,
    SubmissionRequest,
    UrlEncodedBody,
    decode_urlencoded,
    parse_payload,
)


def test_named_params_win_over_body():
    parsed = parse_payload(
        {"name": "Jane", "phone": "055", "location": "Accra", "other": "x"},
        '{"name": "Ignored"}',
    )
    assert isinstance(parsed, NamedParams)
    assert parsed.resolve() == SubmissionRequest("Jane", "055", "Accra")


def test_partial_named_params_are_still_named_params():
    parsed = parse_payload({"name": "Jane"}, "")
    assert isinstance(parsed, NamedParams)
    assert parsed.resolve() == SubmissionRequest(name="Jane")


def test_json_body_values_are_coerced_to_text():
    parsed = parse_payload({}, '{"name": "Jane", "phone": 551234567, "location": null}')
    assert isinstance(parsed, JsonBody)
    assert parsed.resolve() == SubmissionRequest("Jane", "551234567", "")


def test_urlencoded_fallback_decodes_plus_and_percent():
    parsed = parse_payload({}, "name=Jane+Doe&phone=%2B233%20551&location=East+Legon%2C+Accra")
    assert isinstance(parsed, UrlEncodedBody)
    assert parsed.resolve() == SubmissionRequest("Jane Doe", "+233 551", "East Legon, Accra")


def test_urlencoded_splits_on_first_equals_only():
    assert decode_urlencoded("location=a=b&&name=") == {"location": "a=b", "name": ""}


def test_urlencoded_missing_keys_default_to_empty():
    request = parse_payload({}, "name=Jane").resolve()
    assert request == SubmissionRequest(name="Jane")


def test_malformed_json_without_form_keys_is_a_parse_error():
    with pytest.raises(DataParseError):
        parse_payload({}, '{"name": "A", "phone":}')


def test_json_array_falls_back_and_fails():
    with pytest.raises(DataParseError):
        parse_payload({}, '["Jane", "055", "Accra"]')


@pytest.mark.parametrize("body", ["", "   \n"])
def test_empty_request_is_a_parse_error(body):
    with pytest.raises(DataParseError):
        parse_payload({}, body)
