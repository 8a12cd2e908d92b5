import pytest

from xdccfetch.colors import convert_from_mirc, convert_to_mirc, strip_from_mirc

CONTROL_CHARS = "\x02\x03\x0f\x16\x1f"

SAMPLES = [
    "\x02bold\x02 plain",
    "\x1funder\x1f and \x16rev\x16",
    "\x0304red \x0309,02green\x0f done",
    "\x02\x1fnested",
    "\x0399out of range",
    "trailing colour \x03",
]


@pytest.mark.parametrize("message", SAMPLES)
def test_strip_leaves_no_control_chars(message):
    stripped = strip_from_mirc(message)
    assert not any(char in stripped for char in CONTROL_CHARS)


@pytest.mark.parametrize("message", SAMPLES)
def test_converted_tags_are_balanced(message):
    converted = convert_from_mirc(message)
    for start, end in (("[B]", "[/B]"), ("[U]", "[/U]"), ("[I]", "[/I]")):
        assert converted.count(start) == converted.count(end)
    assert converted.count("[COLOR=") == converted.count("[/COLOR]")
    assert not any(char in converted for char in CONTROL_CHARS)


@pytest.mark.parametrize("text", ["plain text", "", "a [b] c", "100% done"])
def test_plain_text_is_unchanged(text):
    assert strip_from_mirc(text) == text
    assert convert_from_mirc(text) == text


def test_strip_keeps_text():
    assert strip_from_mirc("\x02hi\x02") == "hi"


def test_bold_tags():
    assert convert_from_mirc("\x02bold\x02") == "[B]bold[/B]"


def test_color_tag():
    assert convert_from_mirc("\x0304red") == "[COLOR=RED]red[/COLOR]"


def test_reset_closes_open_tags():
    converted = convert_from_mirc("\x02a\x0fb")
    assert converted.endswith("b")
    assert converted.count("[/B]") == 1


@pytest.mark.parametrize(
    "message", ["\x02a\x02\x1fb\x1f", "\x16x\x16 y", "\x02\x02"]
)
def test_toggle_round_trip(message):
    assert convert_to_mirc(convert_from_mirc(message)) == message


def test_color_round_trip_keeps_text():
    message = "\x0304red\x0f"
    assert convert_to_mirc(convert_from_mirc(message)) == message


def test_background_round_trip():
    back = convert_to_mirc(convert_from_mirc("\x0304,02x"))
    assert strip_from_mirc(back) == "x"
    assert back.startswith("\x0304,02x")


def test_to_mirc_bold():
    assert convert_to_mirc("[B]x[/B]") == "\x02x\x02"


@pytest.mark.parametrize(
    "text", ["[foo]x", "a[b", "[]", "[COLOR=PINK]x", "[COLOR=RED/]x", "end["]
)
def test_to_mirc_keeps_unknown_tags(text):
    assert convert_to_mirc(text) == text


def test_to_mirc_without_tags_is_identity():
    assert convert_to_mirc("no tags here") == "no tags here"