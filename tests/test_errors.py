from __future__ import annotations

import pytest

from faceted.errors import ConfigurationError, FacetedError

pytestmark = pytest.mark.unit


def test_hint_is_kept_out_of_message() -> None:
    err = ConfigurationError("bad value", hint="do this")
    assert str(err) == "bad value"
    assert err.hint == "do this"


def test_hint_defaults_to_none() -> None:
    assert FacetedError("fail").hint is None


def test_configuration_error_is_faceted_error() -> None:
    assert isinstance(ConfigurationError("x"), FacetedError)
