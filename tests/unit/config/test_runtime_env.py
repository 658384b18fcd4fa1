import pytest

from proctrack.config import ConfigurationError, runtime


def test_load_default_values_prefers_first_source(monkeypatch, tmp_path):
    first = tmp_path / ".env"
    first.write_text("FIRST=from_env\nSHARED=first\n")
    second = tmp_path / "home.env"
    second.write_text("SHARED=second\nOTHER=3\n")

    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", (first, second))

    defaults = runtime._load_default_values()
    assert defaults == {"FIRST": "from_env", "SHARED": "first", "OTHER": "3"}
    # Cached value is reused without re-reading files
    assert runtime._load_default_values() is defaults


def test_reset_default_values_rereads_files(monkeypatch, tmp_path):
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("KEY=one\n")
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", (dotenv_path,))
    assert runtime._load_default_values() == {"KEY": "one"}

    dotenv_path.write_text("KEY=two\n")
    runtime.reset_default_values()
    assert runtime._load_default_values() == {"KEY": "two"}


def test_env_str_uses_defaults_and_handles_blanks(monkeypatch):
    runtime._DEFAULT_VALUES = {"FALLBACK": " spaced "}
    monkeypatch.delenv("FALLBACK", raising=False)
    assert runtime.env_str("FALLBACK") == "spaced"

    monkeypatch.setenv("ALLOW_BLANK", "")
    assert runtime.env_str("ALLOW_BLANK", allow_blank=True) == ""

    monkeypatch.setenv("NO_STRIP", " padded ")
    assert runtime.env_str("NO_STRIP", strip=False) == " padded "

    runtime._DEFAULT_VALUES = {}
    monkeypatch.delenv("MISSING_REQUIRED", raising=False)
    with pytest.raises(ConfigurationError):
        runtime.env_str("MISSING_REQUIRED", required=True)


def test_env_int_and_float_validation(monkeypatch):
    monkeypatch.setenv("INT_VALUE", "7")
    assert runtime.env_int("INT_VALUE") == 7

    monkeypatch.delenv("INT_REQUIRED", raising=False)
    with pytest.raises(ConfigurationError):
        runtime.env_int("INT_REQUIRED", required=True)

    monkeypatch.setenv("INT_INVALID", "abc")
    with pytest.raises(ConfigurationError):
        runtime.env_int("INT_INVALID")

    monkeypatch.setenv("FLOAT_VALUE", "2.5")
    assert runtime.env_float("FLOAT_VALUE") == 2.5

    monkeypatch.setenv("FLOAT_INVALID", "fast")
    with pytest.raises(ConfigurationError):
        runtime.env_float("FLOAT_INVALID")

    monkeypatch.delenv("FLOAT_MISSING", raising=False)
    assert runtime.env_float("FLOAT_MISSING", or_value=1.5) == 1.5


def test_env_bool_accepts_common_spellings(monkeypatch):
    monkeypatch.setenv("BOOL_YES", "Yes")
    monkeypatch.setenv("BOOL_OFF", "off")
    monkeypatch.setenv("BOOL_BAD", "maybe")
    monkeypatch.delenv("BOOL_MISSING", raising=False)

    assert runtime.env_bool("BOOL_YES") is True
    assert runtime.env_bool("BOOL_OFF") is False
    assert runtime.env_bool("BOOL_MISSING", or_value=True) is True
    with pytest.raises(ConfigurationError):
        runtime.env_bool("BOOL_BAD")


def test_env_list_splits_and_deduplicates(monkeypatch):
    monkeypatch.setenv("LIST_VALUE", " bash , sh,,BASH ,npm ")
    assert runtime.env_list("LIST_VALUE") == ("bash", "sh", "BASH", "npm")
    assert runtime.env_list("LIST_VALUE", casefold_unique=True) == ("bash", "sh", "npm")

    monkeypatch.setenv("LIST_PIPE", "a|b")
    assert runtime.env_list("LIST_PIPE", separator="|") == ("a", "b")


def test_env_list_falls_back_and_enforces_required(monkeypatch):
    monkeypatch.delenv("LIST_MISSING", raising=False)
    assert runtime.env_list("LIST_MISSING") is None
    assert runtime.env_list("LIST_MISSING", or_value=["x", "y"]) == ("x", "y")
    with pytest.raises(ConfigurationError):
        runtime.env_list("LIST_MISSING", required=True)

    monkeypatch.setenv("LIST_EMPTY", " , ")
    with pytest.raises(ConfigurationError):
        runtime.env_list("LIST_EMPTY", required=True)
