import pytest

from finboard.context import ThemeContext
from finboard.events import THEME_CHANGED, EventBus
from finboard.exceptions import ThemeError
from finboard.themes import DEFAULT_THEME, NEUTRAL, VIBRANT


def test_root_defaults_to_default_theme():
    assert ThemeContext().current_theme is DEFAULT_THEME


def test_set_theme_notifies_subscribers_once():
    ctx = ThemeContext(VIBRANT)
    seen = []
    ctx.subscribe(seen.append)

    ctx.set_theme(NEUTRAL)
    assert ctx.current_theme is NEUTRAL
    assert seen == [NEUTRAL]

    # same theme again changes nothing observable
    ctx.set_theme(NEUTRAL)
    assert seen == [NEUTRAL]


def test_unsubscribe_stops_notifications():
    ctx = ThemeContext(VIBRANT)
    seen = []
    unsubscribe = ctx.subscribe(seen.append)
    unsubscribe()
    ctx.set_theme(NEUTRAL)
    assert seen == []


def test_set_theme_rejects_non_theme():
    ctx = ThemeContext(VIBRANT)
    with pytest.raises(ThemeError):
        ctx.set_theme("Neutral")
    assert ctx.current_theme is VIBRANT


def test_child_inherits_parent_theme():
    root = ThemeContext(VIBRANT)
    child = root.provide()
    seen = []
    child.subscribe(seen.append)

    root.set_theme(NEUTRAL)
    assert child.current_theme is NEUTRAL
    assert seen == [NEUTRAL]


def test_override_is_scoped_to_subtree():
    root = ThemeContext(VIBRANT)
    with root.provide(NEUTRAL) as sidebar:
        assert sidebar.current_theme is NEUTRAL
        assert root.current_theme is VIBRANT

        seen = []
        sidebar.subscribe(seen.append)
        root.set_theme(NEUTRAL)
        root.set_theme(VIBRANT)
        # sidebar kept its own theme throughout
        assert seen == []
        assert sidebar.current_theme is NEUTRAL


def test_clear_override_falls_back_to_parent():
    root = ThemeContext(VIBRANT)
    child = root.provide(NEUTRAL)
    child.clear_override()
    assert not child.overrides
    assert child.current_theme is VIBRANT


def test_detached_child_stops_following_parent():
    root = ThemeContext(VIBRANT)
    child = root.provide()
    seen = []
    child.subscribe(seen.append)
    child.detach()
    root.set_theme(NEUTRAL)
    assert seen == []


def test_switching_away_and_back_restores_tokens():
    ctx = ThemeContext(VIBRANT)
    initial = ctx.current_theme.tokens()

    ctx.set_theme(NEUTRAL)
    assert ctx.current_theme.tokens() != initial
    ctx.set_theme(VIBRANT)

    assert ctx.current_theme is VIBRANT
    assert ctx.current_theme.tokens() == initial


def test_detach_removes_bus_handlers():
    bus = EventBus()
    root = ThemeContext(VIBRANT, bus=bus)
    for _ in range(3):
        with root.provide() as child:
            child.subscribe(lambda theme: None)
            child.subscribe(lambda theme: None)
            assert bus.subscriber_count(THEME_CHANGED) == 2
    assert bus.subscriber_count(THEME_CHANGED) == 0
