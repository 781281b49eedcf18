import pytest

from site_synthesizer.errors import MissingRootElement, TooShort
from site_synthesizer.validator import MIN_MARKUP_LENGTH, MarkupValidator, RejectionReason


def _markup(length: int) -> str:
    prefix = "<html><body>"
    suffix = "</body></html>"
    return prefix + "x" * (length - len(prefix) - len(suffix)) + suffix


def test_length_boundary():
    validator = MarkupValidator()

    short = validator.validate(_markup(MIN_MARKUP_LENGTH - 1))
    assert not short.accepted
    assert short.reason == RejectionReason.too_short

    assert validator.validate(_markup(MIN_MARKUP_LENGTH)).accepted


def test_root_element_is_required():
    result = MarkupValidator().validate("<div>" + "x" * 300 + "</div>")

    assert not result.accepted
    assert result.reason == RejectionReason.missing_root_element


def test_root_element_check_is_case_insensitive():
    assert MarkupValidator().validate("<HTML>" + "x" * 300 + "</HTML>").accepted


def test_length_is_checked_first():
    result = MarkupValidator().validate("tiny")

    assert result.reason == RejectionReason.too_short


def test_raise_for_rejection():
    validator = MarkupValidator(min_length=10)

    validator.validate("<html>" + "x" * 10).raise_for_rejection()
    with pytest.raises(TooShort):
        validator.validate("<html>").raise_for_rejection()
    with pytest.raises(MissingRootElement):
        validator.validate("y" * 20).raise_for_rejection()
