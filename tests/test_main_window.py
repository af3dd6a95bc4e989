from coffeetime.ui.main_window import UNLOCK_TOAST_DELAY_MS, unlock_delay_ms


def test_first_unlock_uses_base_delay() -> None:
    assert unlock_delay_ms(0) == UNLOCK_TOAST_DELAY_MS


def test_later_unlocks_are_staggered() -> None:
    delays = [unlock_delay_ms(position) for position in range(3)]
    assert delays == sorted(set(delays))
    # each toast stays up for 5 seconds in the status bar
    assert delays[1] - delays[0] >= 3000
