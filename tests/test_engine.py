"""Unit tests for the game engine."""

import pytest

from helpers import B, G, R, Y, draw_two, make_engine, num, skip, wild, wild_draw_four
from unoduel.engine import (
    CardType,
    Color,
    Deck,
    DrawCard,
    Engine,
    EngineConfig,
    ErrorKind,
    ManualScheduler,
    PassTurn,
    PhaseKind,
    PlayCard,
    Seat,
    Start,
    create_deck,
    legal,
)
from unoduel.engine.errors import (
    DeckExhausted,
    IllegalPlay,
    MustDrawDenied,
    OutOfRange,
    WrongPhase,
)
from unoduel.engine.events import (
    CardPlayed,
    CardsDrawn,
    ColorChanged,
    GameOver,
    PhaseChanged,
    UnoDeclared,
    UnoWindowOpened,
)
from unoduel.engine.game_state import Phase


def test_start_deals_and_turns_up_card() -> None:
    engine = Engine(config=EngineConfig(seed=1), scheduler=ManualScheduler())
    assert engine.phase.kind is PhaseKind.NOT_STARTED
    engine.start()
    snap = engine.snapshot()
    assert len(snap.human_hand) == 5
    assert snap.computer_hand_count == 5
    assert snap.discard_count == 1
    assert snap.deck_count == 56 - 5 * 2 - 1
    assert not snap.top_card.is_wild
    assert snap.active_color is snap.top_card.color
    assert snap.phase.kind is PhaseKind.PLAYER_TURN

    events = engine.drain_events()
    assert events[-1] == PhaseChanged(Phase(PhaseKind.PLAYER_TURN))
    assert CardsDrawn(Seat.HUMAN, 5) in events
    assert ColorChanged(snap.active_color) in events


def test_start_twice_is_wrong_phase() -> None:
    engine = Engine(config=EngineConfig(seed=1), scheduler=ManualScheduler())
    engine.start()
    with pytest.raises(WrongPhase):
        engine.start()
    assert engine.handle(Start()).error is ErrorKind.WRONG_PHASE


def test_start_reinserts_wild_first_cards() -> None:
    human = [num(R, i) for i in range(5)]
    computer = [num(B, i) for i in range(5)]
    rest = [c for c in create_deck() if c not in human and c not in computer]
    wilds = [c for c in rest if c.is_wild]
    others = [c for c in rest if not c.is_wild]
    deck = Deck.stacked(human + computer + wilds + others)

    engine = Engine(scheduler=ManualScheduler())
    engine.start(deck=deck)
    top = engine.snapshot().top_card
    assert not top.is_wild
    assert sum(1 for c in engine.state.deck.draw_pile if c.is_wild) == 8


def test_commands_before_start_are_wrong_phase() -> None:
    engine = Engine(scheduler=ManualScheduler())
    with pytest.raises(WrongPhase):
        engine.play_card(Seat.HUMAN, 0)
    with pytest.raises(WrongPhase):
        engine.advance_computer()
    with pytest.raises(WrongPhase):
        engine.choose_color(Color.RED)
    assert engine.legal_commands(Seat.HUMAN) == [Start()]


def test_color_match_scenario() -> None:
    engine, _ = make_engine([num(R, 3), num(B, 9)])
    result = engine.handle(PlayCard(Seat.HUMAN, 0))
    assert result.ok
    events = engine.drain_events()
    assert CardPlayed(Seat.HUMAN, num(R, 3)) in events
    assert PhaseChanged(Phase(PhaseKind.COMPUTER_TURN)) in events
    assert events.index(CardPlayed(Seat.HUMAN, num(R, 3))) < events.index(
        PhaseChanged(Phase(PhaseKind.COMPUTER_TURN))
    )


def test_skip_self_replay_scenario() -> None:
    engine, _ = make_engine([skip(R), num(G, 2)])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase.kind is PhaseKind.PLAYER_TURN
    assert not any(isinstance(e, PhaseChanged) for e in engine.drain_events())


def test_draw_two_keeps_turn_and_feeds_opponent() -> None:
    engine, _ = make_engine([draw_two(R), num(G, 2), num(G, 3)])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase.kind is PhaseKind.PLAYER_TURN
    assert engine.snapshot().computer_hand_count == 5
    assert CardsDrawn(Seat.COMPUTER, 2) in engine.drain_events()


def test_wild_then_color_choice_scenario() -> None:
    engine, _ = make_engine(
        [wild(), num(G, 2), num(Y, 4)],
        computer=[num(R, 7), num(B, 1), num(Y, 9)],
    )
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase.kind is PhaseKind.AWAITING_COLOR_CHOICE
    assert engine.phase.next_phase is PhaseKind.COMPUTER_TURN

    engine.choose_color(Color.BLUE)
    snap = engine.snapshot()
    assert snap.active_color is Color.BLUE
    assert snap.phase.kind is PhaseKind.COMPUTER_TURN
    assert legal(num(B, 1), snap.top_card)
    assert not legal(num(R, 7), snap.top_card)

    engine.drain_events()
    engine.advance_computer()
    assert CardPlayed(Seat.COMPUTER, num(B, 1)) in engine.drain_events()


def test_wild_draw_four_scenario() -> None:
    engine, _ = make_engine([wild_draw_four(), num(G, 2), num(Y, 4)])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.snapshot().computer_hand_count == 7
    assert engine.phase.kind is PhaseKind.AWAITING_COLOR_CHOICE

    engine.choose_color(Color.GREEN)
    snap = engine.snapshot()
    assert snap.phase.kind is PhaseKind.COMPUTER_TURN
    assert snap.active_color is Color.GREEN
    assert snap.top_card.type is CardType.WILD_DRAW_FOUR


def test_choose_color_rejects_wild_and_wrong_phase() -> None:
    engine, _ = make_engine([wild(), num(G, 2), num(Y, 4)])
    with pytest.raises(WrongPhase):
        engine.choose_color(Color.RED)
    engine.play_card(Seat.HUMAN, 0)
    with pytest.raises(IllegalPlay):
        engine.choose_color(Color.WILD)
    assert engine.phase.kind is PhaseKind.AWAITING_COLOR_CHOICE


def test_play_errors_leave_state_unchanged() -> None:
    engine, _ = make_engine([num(B, 9), num(G, 2)])
    before = engine.snapshot()
    with pytest.raises(OutOfRange):
        engine.play_card(Seat.HUMAN, 2)
    with pytest.raises(IllegalPlay):
        engine.play_card(Seat.HUMAN, 0)
    with pytest.raises(WrongPhase):
        engine.play_card(Seat.COMPUTER, 0)
    assert engine.snapshot() == before
    assert engine.drain_events() == []

    result = engine.handle(PlayCard(Seat.HUMAN, 7))
    assert not result.ok
    assert result.error is ErrorKind.OUT_OF_RANGE


def test_draw_denied_when_play_exists() -> None:
    engine, _ = make_engine([num(R, 3), num(B, 9)])
    before = engine.snapshot()
    with pytest.raises(MustDrawDenied):
        engine.draw_card(Seat.HUMAN)
    assert engine.snapshot() == before
    assert engine.handle(DrawCard(Seat.HUMAN)).error is ErrorKind.MUST_DRAW_DENIED


def test_drawn_legal_card_can_be_played() -> None:
    engine, _ = make_engine([num(B, 9), num(G, 2)], draws=[num(R, 8)])
    card = engine.draw_card(Seat.HUMAN)
    assert card == num(R, 8)
    assert engine.phase.kind is PhaseKind.PLAYER_TURN
    assert engine.legal_commands(Seat.HUMAN) == [PlayCard(Seat.HUMAN, 2)]
    engine.play_card(Seat.HUMAN, 2)
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN


def test_drawn_illegal_card_passes_turn() -> None:
    engine, _ = make_engine([num(B, 9), num(G, 2)], draws=[num(Y, 8)])
    engine.draw_card(Seat.HUMAN)
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN
    assert len(engine.snapshot().human_hand) == 3


def test_win_pre_empts_skip() -> None:
    engine, _ = make_engine([skip(R)])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase == Phase(PhaseKind.GAME_OVER, winner=Seat.HUMAN)
    assert GameOver(Seat.HUMAN) in engine.drain_events()
    assert engine.legal_commands(Seat.HUMAN) == []


def test_win_pre_empts_draw_two_and_wild() -> None:
    engine, _ = make_engine([draw_two(R)])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase.winner is Seat.HUMAN
    assert engine.snapshot().computer_hand_count == 1

    engine, _ = make_engine([wild_draw_four()])
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase.kind is PhaseKind.GAME_OVER
    with pytest.raises(WrongPhase):
        engine.choose_color(Color.RED)


def test_computer_draw_two_then_plays_again() -> None:
    engine, _ = make_engine(
        [num(R, 3), num(B, 9), num(B, 8)],
        computer=[num(G, 1), draw_two(R), num(R, 9)],
    )
    engine.play_card(Seat.HUMAN, 0)
    engine.drain_events()

    engine.advance_computer()
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN
    assert len(engine.snapshot().human_hand) == 4

    engine.advance_computer()
    events = engine.drain_events()
    assert CardPlayed(Seat.COMPUTER, num(R, 9)) in events
    assert UnoWindowOpened in [type(e) for e in events]
    assert UnoDeclared(Seat.COMPUTER) in events
    assert engine.state.computer.called_uno
    assert engine.snapshot().open_window is None
    assert engine.phase.kind is PhaseKind.PLAYER_TURN


def test_computer_wild_picks_its_best_color() -> None:
    engine, _ = make_engine(
        [num(R, 3), num(B, 9), num(G, 8), num(G, 7)],
        computer=[num(Y, 1), wild(), num(B, 1), num(B, 2)],
    )
    engine.play_card(Seat.HUMAN, 0)
    engine.drain_events()
    engine.advance_computer()
    snap = engine.snapshot()
    assert snap.top_card.type is CardType.WILD
    assert snap.active_color is Color.BLUE
    assert snap.phase.kind is PhaseKind.PLAYER_TURN
    assert ColorChanged(Color.BLUE) in engine.drain_events()


def test_computer_draws_and_plays_legal_card() -> None:
    engine, _ = make_engine(
        [num(R, 3), num(B, 9), num(B, 8)],
        computer=[num(G, 1), num(Y, 2), num(G, 4)],
        draws=[num(R, 8)],
    )
    engine.play_card(Seat.HUMAN, 0)
    engine.drain_events()
    engine.advance_computer()
    events = engine.drain_events()
    assert events[0] == CardsDrawn(Seat.COMPUTER, 1)
    assert CardPlayed(Seat.COMPUTER, num(R, 8)) in events
    assert engine.snapshot().computer_hand_count == 3
    assert engine.phase.kind is PhaseKind.PLAYER_TURN


def test_computer_draws_and_passes() -> None:
    engine, _ = make_engine(
        [num(R, 3), num(B, 9), num(B, 8)],
        computer=[num(G, 1), num(Y, 2), num(G, 4)],
        draws=[num(Y, 9)],
    )
    engine.play_card(Seat.HUMAN, 0)
    engine.advance_computer()
    assert engine.snapshot().computer_hand_count == 4
    assert engine.phase.kind is PhaseKind.PLAYER_TURN


def test_advance_computer_outside_its_turn() -> None:
    engine, _ = make_engine([num(R, 3), num(B, 9)])
    with pytest.raises(WrongPhase):
        engine.advance_computer()


def test_start_fails_on_short_deck() -> None:
    engine = Engine(config=EngineConfig(hand_size=5), scheduler=ManualScheduler())
    with pytest.raises(DeckExhausted):
        engine.start(deck=Deck.stacked([num(R, i) for i in range(8)]))
    assert engine.phase == Phase(PhaseKind.GAME_OVER, winner=None)


def test_legal_commands_by_phase() -> None:
    engine, _ = make_engine([num(R, 3), num(B, 9), wild()])
    assert engine.legal_commands(Seat.HUMAN) == [PlayCard(Seat.HUMAN, 0), PlayCard(Seat.HUMAN, 2)]
    assert engine.legal_commands(Seat.COMPUTER) == []

    engine.play_card(Seat.HUMAN, 2)
    assert len(engine.legal_commands(Seat.HUMAN)) == 4

    engine.choose_color(Color.RED)
    assert [type(c).__name__ for c in engine.legal_commands(Seat.COMPUTER)] == ["AdvanceComputer"]


def test_pass_turn_only_when_deck_exhausted() -> None:
    engine, _ = make_engine([num(B, 9), num(G, 2)])
    with pytest.raises(WrongPhase):
        engine.pass_turn(Seat.HUMAN)

    # Everything but the top card goes to the computer
    state = engine.state
    state.computer.add_many(state.deck.draw_pile)
    state.deck.draw_pile.clear()
    engine.drain_events()

    with pytest.raises(DeckExhausted):
        engine.draw_card(Seat.HUMAN)
    assert [type(c).__name__ for c in engine.legal_commands(Seat.HUMAN)] == ["PassTurn"]
    engine.pass_turn(Seat.HUMAN)
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN


def _exhaust_draw_pile(engine: Engine, into: Seat) -> None:
    state = engine.state
    state.player(into).add_many(state.deck.draw_pile)
    state.deck.draw_pile.clear()
    engine.drain_events()


def test_last_draw_two_wins_without_supply() -> None:
    engine, _ = make_engine([draw_two(R)])
    _exhaust_draw_pile(engine, into=Seat.COMPUTER)
    computer_cards = engine.snapshot().computer_hand_count

    assert engine.legal_commands(Seat.HUMAN) == [PlayCard(Seat.HUMAN, 0)]
    engine.play_card(Seat.HUMAN, 0)
    assert engine.phase == Phase.game_over(Seat.HUMAN)
    assert engine.snapshot().computer_hand_count == computer_cards


def test_computer_last_draw_two_wins_without_supply() -> None:
    engine, _ = make_engine([num(G, 1)], computer=[draw_two(R)], draws=[num(B, 2)])
    engine.draw_card(Seat.HUMAN)
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN
    _exhaust_draw_pile(engine, into=Seat.HUMAN)
    human_cards = len(engine.snapshot().human_hand)

    engine.advance_computer()
    assert engine.phase == Phase.game_over(Seat.COMPUTER)
    assert len(engine.snapshot().human_hand) == human_cards


def test_unsupplied_play_is_not_offered() -> None:
    engine, _ = make_engine([wild_draw_four(), num(B, 9)])
    _exhaust_draw_pile(engine, into=Seat.COMPUTER)

    assert engine.legal_commands(Seat.HUMAN) == [PassTurn(Seat.HUMAN)]
    with pytest.raises(DeckExhausted):
        engine.play_card(Seat.HUMAN, 0)
    assert len(engine.snapshot().human_hand) == 2
    engine.pass_turn(Seat.HUMAN)
    assert engine.phase.kind is PhaseKind.COMPUTER_TURN


def test_snapshot_indices_survive_timer_draw() -> None:
    engine, scheduler = make_engine([num(R, 3), num(B, 9)])
    engine.play_card(Seat.HUMAN, 0)
    before = engine.snapshot()

    scheduler.advance(4.0)
    after = engine.snapshot()
    assert len(after.human_hand) == len(before.human_hand) + 1
    for i, card in enumerate(before.human_hand):
        assert after.human_hand[i] == card
        assert engine.state.human.hand[i] == card
