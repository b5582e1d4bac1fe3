import dataclasses

import pytest

from dcver.options import HasArg, LongOption


def test_has_arg_coerced_from_int():
    option = LongOption("input", 1, val="i")
    assert option.has_arg is HasArg.REQUIRED
    assert option.val == "i"


def test_defaults():
    option = LongOption("help")
    assert option.has_arg is HasArg.NONE
    assert option.flag is None


def test_optional_argument_kind():
    option = LongOption("mode", HasArg.OPTIONAL, val="m")
    assert option.has_arg is HasArg.OPTIONAL
    assert option.has_arg > HasArg.REQUIRED


def test_invalid_has_arg():
    with pytest.raises(ValueError):
        LongOption("input", 5)


def test_empty_name_rejected():
    with pytest.raises(ValueError):
        LongOption("")


def test_flag_must_be_callable():
    with pytest.raises(TypeError):
        LongOption("verbose", flag=3, val=1)


def test_flag_callback_kept():
    seen = []
    option = LongOption("verbose", flag=seen.append, val=1)
    option.flag(option.val)
    assert seen == [1]


def test_frozen():
    option = LongOption("output", HasArg.REQUIRED, val="o")
    with pytest.raises(dataclasses.FrozenInstanceError):
        option.name = "other"
    assert option.name == "output"
    assert option.has_arg is HasArg.REQUIRED
    assert option.val == "o"