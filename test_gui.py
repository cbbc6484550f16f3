"""
Tests for the GUI mode switching, without opening a window
"""
import pytest

pytest.importorskip("tkinter")

from gui import RoyalCalcGUI


class FakeWidget:
    def __init__(self):
        self.destroyed = False

    def destroy(self):
        self.destroyed = True


class FakeRoot:
    def __init__(self):
        self.unbound = []

    def unbind(self, sequence):
        self.unbound.append(sequence)


@pytest.fixture
def gui():
    gui = RoyalCalcGUI.__new__(RoyalCalcGUI)
    gui.root = FakeRoot()
    gui.bars = []

    def show_history():
        bar = FakeWidget()
        gui.bars.append(bar)
        gui._history_bar = bar

    gui.clear_content_frame = lambda: None
    gui.show_calculator_mode = lambda: None
    gui.show_history_mode = show_history
    return gui


def test_back_to_keypad_removes_history_bar(gui):
    gui.switch_mode("history")
    (bar,) = gui.bars
    assert not bar.destroyed

    gui.switch_mode("calculator")
    assert bar.destroyed
    assert gui._history_bar is None
    assert gui.root.unbound == ["<Escape>"]


def test_reopening_history_keeps_one_bar(gui):
    gui.switch_mode("history")
    gui.switch_mode("history")

    first, second = gui.bars
    assert first.destroyed
    assert not second.destroyed
    assert gui._history_bar is second


def test_keypad_switch_without_bar_is_quiet(gui):
    gui.switch_mode("calculator")
    assert gui.root.unbound == []
    assert gui.current_mode == "calculator"
