import pytest

from zaplite.levels import MAX_LEVEL, MIN_LEVEL, Level, level_of, parse_level


@pytest.mark.parametrize(
    "lvl, expected",
    [
        (Level.DEBUG, "debug"),
        (Level.INFO, "info"),
        (Level.WARN, "warn"),
        (Level.ERROR, "error"),
        (Level.DPANIC, "dpanic"),
        (Level.PANIC, "panic"),
        (Level.FATAL, "fatal"),
        (Level(-42), "Level(-42)"),
        (Level.INVALID, "Level(6)"),
    ],
)
def test_level_string(lvl, expected):
    assert str(lvl) == expected
    assert lvl.capital_string() == expected.upper()
    assert f"{lvl}" == expected


@pytest.mark.parametrize(
    "text, level",
    [
        ("debug", Level.DEBUG),
        ("info", Level.INFO),
        ("", Level.INFO),
        ("warn", Level.WARN),
        ("error", Level.ERROR),
        ("dpanic", Level.DPANIC),
        ("panic", Level.PANIC),
        ("fatal", Level.FATAL),
    ],
)
def test_level_text(text, level):
    if text:
        assert level.marshal_text() == text
    assert parse_level(text) == level
    assert parse_level(text.encode()) == level


def test_warning_compatibility():
    assert parse_level("warning") == Level.WARN


@pytest.mark.parametrize(
    "text, level",
    [("info", Level.INFO), ("DEBUG", Level.DEBUG), ("WARNING", Level.WARN)],
)
def test_parse_level(text, level):
    assert parse_level(text) == level


def test_parse_level_error():
    with pytest.raises(ValueError, match='unrecognized level: "FOO"'):
        parse_level("FOO")


@pytest.mark.parametrize(
    "text, level",
    [
        ("DEBUG", Level.DEBUG),
        ("INFO", Level.INFO),
        ("WARN", Level.WARN),
        ("ERROR", Level.ERROR),
        ("DPANIC", Level.DPANIC),
        ("PANIC", Level.PANIC),
        ("FATAL", Level.FATAL),
    ],
)
def test_capital_levels_parse(text, level):
    assert parse_level(text) == level


@pytest.mark.parametrize(
    "text, level",
    [
        ("Debug", Level.DEBUG),
        ("Info", Level.INFO),
        ("Warn", Level.WARN),
        ("Error", Level.ERROR),
        ("Dpanic", Level.DPANIC),
        ("Panic", Level.PANIC),
        ("Fatal", Level.FATAL),
        ("DeBuG", Level.DEBUG),
        ("InFo", Level.INFO),
        ("WaRn", Level.WARN),
        ("ErRor", Level.ERROR),
        ("DpAnIc", Level.DPANIC),
        ("PaNiC", Level.PANIC),
        ("FaTaL", Level.FATAL),
    ],
)
def test_weird_levels_parse(text, level):
    assert parse_level(text) == level


def test_unmarshal_unknown_text():
    with pytest.raises(ValueError, match="unrecognized level"):
        parse_level("foo")


def test_parsed_level_is_level():
    parsed = parse_level("error")
    assert isinstance(parsed, Level)
    assert str(parsed) == "error"


def test_enabled():
    assert Level.WARN.enabled(Level.WARN) is True
    assert Level.WARN.enabled(Level.FATAL) is True
    assert Level.WARN.enabled(Level.INFO) is False
    assert Level.WARN.enabled(Level.DEBUG) is False


def test_min_max():
    assert level_of(MIN_LEVEL) == Level.DEBUG
    assert level_of(MAX_LEVEL) == Level.FATAL
    assert MIN_LEVEL.enabled(MAX_LEVEL) is True
    assert MAX_LEVEL.enabled(MIN_LEVEL) is False
    assert str(Level.INVALID) == "Level(6)"
    assert Level.INVALID == MAX_LEVEL + 1


class _EnablerWithCustomLevel:
    def __init__(self, lvl):
        self.lvl = lvl

    def enabled(self, lvl):
        return self.lvl.enabled(lvl)

    def level(self):
        return self.lvl


class _NeverEnabled:
    def enabled(self, lvl):
        return False


@pytest.mark.parametrize(
    "give, want",
    [
        (Level.DEBUG, Level.DEBUG),
        (Level.INFO, Level.INFO),
        (Level.WARN, Level.WARN),
        (Level.ERROR, Level.ERROR),
        (Level.DPANIC, Level.DPANIC),
        (Level.PANIC, Level.PANIC),
        (Level.FATAL, Level.FATAL),
        (_EnablerWithCustomLevel(Level.INFO), Level.INFO),
        (_NeverEnabled(), Level.INVALID),
    ],
)
def test_level_of(give, want):
    assert level_of(give) == want


def test_level_of_prefers_own_level_method():
    class Custom:
        def enabled(self, lvl):
            return True

        def level(self):
            return Level.ERROR

    assert level_of(Custom()) == Level.ERROR