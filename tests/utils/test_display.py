from chcc.profiles.store import ProfileStore
from chcc.utils.display import format_default, format_names, format_store, truncate_token


def test_truncate_token():
    """Test tokens are cut to a bounded prefix."""
    assert truncate_token("sk-0123456789abcdefghijklmnop") == "sk-0123456789abcdefg..."
    assert truncate_token("sk-0123456789abcdefghijklmnop", 10) == "sk-0123456..."
    assert truncate_token("short", 10) == "short..."


def test_format_store(sample_store):
    output = format_store(sample_store)

    assert output.splitlines() == [
        "Default API Site: alpha",
        "Available API Sites:",
        "  1. alpha",
        "     URL: https://alpha.example.com",
        "     Token: sk-alpha-0123456789a...",
        "  2. beta",
        "     URL: https://beta.example.com",
        "     Token: sk-beta-0123456789...",
    ]
    assert "sk-alpha-0123456789abcdefghij" not in output


def test_format_default(sample_store):
    output = format_default(sample_store.get_default())

    assert "Name: alpha" in output
    assert "Token: sk-alpha-0..." in output


def test_format_names():
    assert format_names(ProfileStore().names()) == ""
    assert format_names(["a", "b"]) == "  - a\n  - b"
