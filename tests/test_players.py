"""Unit tests for hands, players and the computer strategy."""

import random

import pytest

from helpers import B, G, R, Y, draw_two, num, skip, wild, wild_draw_four
from unoduel.engine import PLAYABLE_COLORS
from unoduel.engine.errors import IllegalPlay, OutOfRange
from unoduel.engine.player import ComputerPlayer, HumanPlayer
from unoduel.engine.strategy import ComputerStrategy


def test_play_removes_card_and_keeps_order() -> None:
    player = HumanPlayer("p", [num(R, 1), num(B, 2), num(R, 3)])
    card = player.play(0, num(R, 9))
    assert card == num(R, 1)
    assert list(player.hand) == [num(B, 2), num(R, 3)]


def test_play_errors_leave_hand_unchanged() -> None:
    player = HumanPlayer("p", [num(B, 2)])
    with pytest.raises(OutOfRange):
        player.play(1, num(R, 9))
    with pytest.raises(OutOfRange):
        player.play(-1, num(R, 9))
    with pytest.raises(IllegalPlay):
        player.play(0, num(R, 9))
    assert list(player.hand) == [num(B, 2)]


def test_find_playable() -> None:
    player = HumanPlayer("p", [num(B, 2), num(G, 9), num(R, 3)])
    assert player.find_playable(num(R, 9)) == 1
    assert player.has_playable(num(R, 9))
    assert player.find_playable(skip(Y)) == -1
    assert not player.has_playable(skip(Y))


def test_called_uno_cleared_when_hand_leaves_one() -> None:
    player = HumanPlayer("p", [num(R, 1), num(R, 2)])
    assert not player.declare_uno()
    player.play(0, num(R, 5))
    assert player.declare_uno()
    assert player.called_uno
    player.add(num(B, 4))
    assert not player.called_uno


def test_hand_resets_chosen_wild_color() -> None:
    player = HumanPlayer("p")
    player.add(wild().with_active_color(G))
    assert player.hand[0] == wild()


def test_strategy_priority_order() -> None:
    strategy = ComputerStrategy(random.Random(0))
    top = num(R, 5)
    hand = [num(R, 1), skip(R), wild(), draw_two(R), wild_draw_four()]
    assert strategy.choose_card(hand, top) == 4
    assert strategy.choose_card(hand[:4], top) == 3
    assert strategy.choose_card(hand[:3], top) == 1
    assert strategy.choose_card([num(R, 1), wild()], top) == 1
    assert strategy.choose_card([num(B, 1), num(R, 1), num(B, 5)], top) == 1


def test_strategy_must_draw() -> None:
    strategy = ComputerStrategy(random.Random(0))
    assert strategy.choose_card([num(B, 1), skip(G)], num(R, 5)) is None


def test_choose_color_most_frequent() -> None:
    strategy = ComputerStrategy(random.Random(0))
    assert strategy.choose_color([num(G, 1), num(G, 2), num(B, 3), wild()]) is G


def test_choose_color_ties_follow_color_order() -> None:
    strategy = ComputerStrategy(random.Random(0))
    assert strategy.choose_color([num(Y, 1), num(B, 2)]) is B
    assert strategy.choose_color([num(Y, 1), num(G, 2), num(R, 3)]) is R
    assert strategy.choose_color([num(Y, 1), num(G, 2)]) is G


def test_choose_color_random_without_colored_cards() -> None:
    strategy = ComputerStrategy(random.Random(0))
    seen = {strategy.choose_color([wild_draw_four()]) for _ in range(200)}
    assert seen == set(PLAYABLE_COLORS)


def test_should_call_uno_probability() -> None:
    assert ComputerStrategy(random.Random(0), 1.0).should_call_uno()
    never = ComputerStrategy(random.Random(0), 0.0)
    assert not any(never.should_call_uno() for _ in range(50))


def test_computer_player_delegates_to_strategy() -> None:
    computer = ComputerPlayer(ComputerStrategy(random.Random(0)), cards=[num(B, 1), num(R, 2)])
    assert computer.choose_card(num(R, 5)) == 1
    assert computer.choose_color() is R
    assert computer.is_computer
