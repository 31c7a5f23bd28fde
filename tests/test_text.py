from __future__ import annotations

import pytest

from tvmatch.services.text import normalize


def test_normalize_collapses_newlines_and_spaces() -> None:
    assert normalize("  Premier\n   League \t ") == "Premier League"


def test_normalize_handles_empty_and_blank_strings() -> None:
    assert normalize("") == ""
    assert normalize(" \n\t ") == ""


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "Premier League",
        "\n\n  Premier League\n  Round 5 \n",
        "a\r\nb\tc   d",
        "La\xa0Liga ",
        "   ",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)
    assert normalize(once) == once
