import pytest

from little_learners.content.visuals import PLACEHOLDER_ICON, resolve_icon


@pytest.mark.parametrize(
    "hint, icon",
    [
        ("apple", "apple"),
        ("Red Apple", "apple"),
        ("starfish", "fish"),
        ("letter", "type"),
        ("rainy day", "cloud"),
        ("plant", "leaf"),
        ("cow", "cow"),
    ],
)
def test_known_hints(hint, icon) -> None:
    assert resolve_icon(hint) == icon


@pytest.mark.parametrize("hint", [None, "", "balloon", "🦄"])
def test_unknown_hints_degrade_to_placeholder(hint) -> None:
    assert resolve_icon(hint) == PLACEHOLDER_ICON
