import pytest

from transmeta.core.metadata import normalize_locale


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("en", "en"),
        ("EN", "en"),
        ("en-us", "en_US"),
        ("pt_BR", "pt_BR"),
        (" de-de ", "de_DE"),
        ("_br", "BR"),
        ("", ""),
    ],
)
def test_normalize_locale(raw: str, expected: str) -> None:
    assert normalize_locale(raw) == expected


def test_normalize_locale_leaves_unrecognized_text_trimmed() -> None:
    assert normalize_locale("___") == "___"
    assert normalize_locale(" en_US.UTF-8 ") == "en_US.UTF-8"
