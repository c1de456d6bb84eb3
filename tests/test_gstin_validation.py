"""Tests for GSTIN / PAN format checks and state lookup."""

import pytest

from gst_billing.domain.services.gstin_validation import (
    gstin_state_code,
    is_valid_gstin,
    is_valid_pan,
    state_name_for_gstin,
)


@pytest.mark.parametrize(
    "gstin",
    ["36AABCU9603R1ZM", "27AADCB2230M1ZP", "29AABCU9603R1ZM", " 27aadcb2230m1zp "],
)
def test_valid_gstins(gstin):
    assert is_valid_gstin(gstin) is True


@pytest.mark.parametrize(
    "gstin",
    [None, "", "ABC", "36AABCU9603R1Z", "36AABCU9603R0ZM", "36AABCU9603R1XM", "3XAABCU9603R1ZM"],
)
def test_invalid_gstins(gstin):
    assert is_valid_gstin(gstin) is False


def test_pan():
    assert is_valid_pan("AABCU9603R") is True
    assert is_valid_pan("aabcu9603r") is True
    assert is_valid_pan("AABC9603R") is False
    assert is_valid_pan(None) is False


def test_state_code_and_name():
    assert gstin_state_code("29AABCU9603R1ZM") == "29"
    assert state_name_for_gstin("29AABCU9603R1ZM") == "Karnataka"
    assert state_name_for_gstin("27AADCB2230M1ZP") == "Maharashtra"
    assert state_name_for_gstin("36AABCU9603R1ZM") == "Telangana"


def test_state_lookup_for_invalid_gstin():
    assert gstin_state_code("not-a-gstin") is None
    assert state_name_for_gstin("not-a-gstin") is None


def test_pre_2014_andhra_pradesh_code():
    assert state_name_for_gstin("28AABCU9603R1ZM") == "Andhra Pradesh"
    assert state_name_for_gstin("37AABCU9603R1ZM") == "Andhra Pradesh"


def test_unknown_state_code_falls_back_to_code():
    # 25 (old Daman and Diu) was merged into 26
    assert state_name_for_gstin("25AABCU9603R1ZM") == "State Code 25"
