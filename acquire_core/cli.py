from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .errors import AcquireError
from .game import Game, Phase
from .config import GameConfig


def _print_status(game: Game) -> None:
    print()
    print(game.game_board.pretty())
    for name, balance, profile in zip(game.get_player_names(), game.get_player_balances(),
                                      game.get_player_stock_profiles()):
        shares = ", ".join(f"{chain} x{n}" for chain, n in profile.items()) or "no stock"
        print(f"  {name}: ${balance} ({shares})")
    chains = ", ".join(f"{name} ${price}" for name, price in game.get_available_stocks())
    if chains:
        print(f"  Chains: {chains}")


def _ask_int(prompt: str, upper: int) -> int:
    while True:
        text = input(prompt).strip()
        try:
            value = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if 0 <= value < upper:
            return value
        print(f'Enter a number from 0 to {upper - 1}.')


def _placement_turn(game: Game) -> bool:
    """Returns False when the current player had to pass."""
    name = game.current_player.name
    if not game.has_playable_tile():
        dead = game.exchange_dead_tiles()
        if dead:
            print(f"{name} exchanged dead tiles: {', '.join(dead)}")
    if not game.has_playable_tile():
        print(f"{name} has no playable tile and passes.")
        game.go_to_next_player()
        return False
    tiles = game.get_current_player_tiles()
    print(f"{name}'s tiles:", ", ".join(f"[{i}] {t}" for i, t in enumerate(tiles)))
    while True:
        idx = _ask_int('Tile to place: ', len(tiles))
        try:
            game.place_tile(idx)
            return True
        except AcquireError as e:
            print(f'Illegal placement: {e}')


def _founding_turn(game: Game) -> None:
    options = game.get_unfounded_chains()
    print('Name the new chain:', ", ".join(f"[{i}] {c}" for i, c in enumerate(options)))
    game.found_chain(options[_ask_int('Chain: ', len(options))])


def _merger_turn(game: Game) -> None:
    merger = game.get_current_merger()
    print(f"{merger.acquiring_chain.name} acquires {merger.acquired_chain.name}!")
    for name, amount in game.pay_merger_bonus():
        print(f"  {name} receives ${amount}")
    while merger.more_players_to_handle():
        who = game.get_merging_player_name()
        while True:
            held = game.get_merging_player_stock_amount()
            choice = input(
                f"{who} holds {held} {merger.acquired_chain.name} (${game.get_merging_stock_price()}). "
                "[s]ell, [t]rade, [k]eep the rest: "
            ).strip().lower()
            try:
                if choice == 's':
                    game.sell_merger_stock()
                elif choice == 't':
                    game.trade_merger_stock()
                elif choice == 'k':
                    break
            except AcquireError as e:
                print(f'Not allowed: {e}')
        game.next_merger_player()
    game.finalize_merger()


def _buy_turn(game: Game) -> bool:
    """Returns False when the players decide to end the game."""
    while game.get_number_of_stock_left_to_buy() > 0 and game.get_available_stocks():
        stocks = game.get_available_stocks()
        print('Buy stock:', ", ".join(f"[{i}] {n} ${p}" for i, (n, p) in enumerate(stocks)), '[d] done')
        text = input('Choice: ').strip().lower()
        if text == 'd':
            break
        try:
            game.buy_stock(int(text))
        except (ValueError, AcquireError) as e:
            print(f'Cannot buy: {e}')
    if game.end_condition_met and input('End the game? [y/N] ').strip().lower() == 'y':
        return False
    return True


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Acquire hot-seat game')
    parser.add_argument('--players', nargs='+', default=['Alice', 'Bob', 'Carol'], help='Player names in turn order')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the tile pool')
    parser.add_argument('--verbose', action='store_true', help='Log rule decisions')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    game = Game(GameConfig.from_env(), seed=args.seed)
    for name in args.players:
        game.add_player(name)
    game.go_to_next_player()

    passes = 0
    while game.phase is not Phase.GAME_OVER:
        _print_status(game)
        if game.phase is Phase.AWAITING_PLACEMENT:
            passes = 0 if _placement_turn(game) else passes + 1
            if passes >= len(game.players):
                print("Nobody can place a tile.")
                break
        elif game.phase is Phase.AWAITING_FOUNDING:
            _founding_turn(game)
        elif game.phase is Phase.AWAITING_MERGE_DECISIONS:
            _merger_turn(game)
        elif game.phase is Phase.AWAITING_STOCK_PURCHASE:
            if not _buy_turn(game):
                break
            game.go_to_next_player()

    print('\nFinal standings:')
    for rank, (name, balance) in enumerate(game.end_game(), start=1):
        print(f"  {rank}. {name}: ${balance}")


if __name__ == '__main__':
    main()
