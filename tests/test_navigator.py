import pytest
from src.gestures.state_machine import NavigationEvent
from src.presenter.navigator import PageNavigator


def test_next_and_previous_clamp():
    nav = PageNavigator(3)
    assert nav.previous_page() is False
    assert nav.next_page() is True
    assert nav.next_page() is True
    assert nav.next_page() is False
    assert nav.current_page == 2


def test_apply_routes_events():
    nav = PageNavigator(5)
    assert nav.apply(NavigationEvent.NEXT_PAGE) is True
    assert nav.apply(NavigationEvent.PREVIOUS_PAGE) is True
    assert nav.apply(NavigationEvent.PAUSE) is None
    assert nav.current_page == 0


def test_listeners_only_fire_on_change():
    pages = []
    nav = PageNavigator(2)
    nav.add_listener(pages.append)
    nav.next_page()
    nav.next_page()
    assert pages == [1]


def test_initial_page_is_clamped():
    assert PageNavigator(4, current_page=10).current_page == 3


def test_page_count_must_be_positive():
    with pytest.raises(ValueError):
        PageNavigator(0)
