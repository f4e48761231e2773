from __future__ import annotations

import logging
import os
import uuid
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request

try:
    from .game import AcquireError, Game, GameConfig, Merger, MergerPhase, Tile  # type: ignore
    from .acquire_core.config import env_flag  # type: ignore
except ImportError:
    from game import AcquireError, Game, GameConfig, Merger, MergerPhase, Tile  # type: ignore
    from acquire_core.config import env_flag  # type: ignore

logger = logging.getLogger(__name__)

app = Flask(__name__)

# In-memory registry; every game lives only as long as the process.
GAMES: Dict[str, Game] = {}


# ---------- JSON helpers ----------

def tile_to_json(t: Tile) -> Dict[str, Any]:
    return {"name": t.name, "x": int(t.x), "y": int(t.y), "chain": t.chain_name}


def merger_to_json(m: Merger) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "acquiring": m.acquiring_chain.name,
        "acquired": m.acquired_chain.name,
        "phase": m.phase.value,
        "shareholders": [p.name for p in m.shareholders],
        "waiting": [p.name for p in m.players_to_decide],
        "price": m.get_stock_price(),
        "payouts": [[p.name, amount] for p, amount in m.payouts],
        "player": None,
        "playerStock": None,
    }
    if m.phase is MergerPhase.BONUS_PAID and m.more_players_to_handle():
        out["player"] = m.get_player_name()
        out["playerStock"] = m.get_player_stock_count()
    return out


def state_to_json(game: Game) -> Dict[str, Any]:
    founder = game.found_needed()
    merger = game.game_board.current_merger
    return {
        "phase": game.phase.value,
        "players": [
            {"name": p.name, "balance": p.balance, "stock": p.holdings()}
            for p in game.players
        ],
        "currentPlayer": game.current_player.name if game.current_player else None,
        "hand": game.get_current_player_tiles(),
        "playable": [
            game.game_board.move_is_legal(t) for t in game.current_player.tiles
        ] if game.current_player else [],
        "played": [tile_to_json(t) for t in game.get_played_tiles()],
        "unfounded": game.get_unfounded_chains(),
        "founded": [
            {"name": c.name, "size": c.size, "price": c.stock_price, "unsold": c.unsold, "safe": c.is_safe}
            for c in game.get_founded_chains()
        ],
        "stockLeftToBuy": game.get_number_of_stock_left_to_buy(),
        "founding": founder.tile_names() if founder else None,
        "merger": merger_to_json(merger) if merger else None,
        "endConditionMet": game.end_condition_met,
        "standings": [[name, balance] for name, balance in game.standings],
        "winner": game.winner,
    }


def _error(e: AcquireError):
    return jsonify({"ok": False, "error": str(e), "kind": type(e).__name__}), 400


def _lookup(game_id: str) -> Optional[Game]:
    return GAMES.get(game_id)


def _command(game_id: str, action: Callable[[Game, Dict[str, Any]], Any]) -> Any:
    game = _lookup(game_id)
    if game is None:
        return jsonify({"ok": False, "error": f"unknown game {game_id}"}), 404
    body = request.get_json(force=True, silent=True) or {}
    try:
        result = action(game, body)
    except AcquireError as e:
        return _error(e)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    payload: Dict[str, Any] = {"ok": True, "state": state_to_json(game)}
    if result is not None:
        payload["result"] = result
    return jsonify(payload)


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed", None)
    game = Game(GameConfig.from_env(), seed=seed)
    try:
        for name in body.get("players", []):
            game.add_player(str(name))
    except AcquireError as e:
        return _error(e)
    game_id = uuid.uuid4().hex
    GAMES[game_id] = game
    logger.info("new game %s", game_id)
    return jsonify({"ok": True, "id": game_id, "state": state_to_json(game)})


@app.get("/api/<game_id>/state")
def api_state(game_id: str) -> Any:
    game = _lookup(game_id)
    if game is None:
        return jsonify({"ok": False, "error": f"unknown game {game_id}"}), 404
    return jsonify({"ok": True, "state": state_to_json(game)})


@app.post("/api/<game_id>/players")
def api_add_player(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.add_player(str(b["name"])).name)


@app.post("/api/<game_id>/next")
def api_next(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.go_to_next_player().name)


@app.post("/api/<game_id>/place")
def api_place(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.place_tile(int(b["index"])))


@app.post("/api/<game_id>/exchange")
def api_exchange(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.exchange_dead_tiles())


@app.post("/api/<game_id>/found")
def api_found(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.found_chain(str(b["name"])).name)


@app.post("/api/<game_id>/buy")
def api_buy(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.buy_stock(int(b["chain"])))


@app.post("/api/<game_id>/merger/bonus")
def api_merger_bonus(game_id: str) -> Any:
    return _command(game_id, lambda g, b: [[n, a] for n, a in g.pay_merger_bonus()])


@app.post("/api/<game_id>/merger/sell")
def api_merger_sell(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.sell_merger_stock())


@app.post("/api/<game_id>/merger/trade")
def api_merger_trade(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.trade_merger_stock())


@app.post("/api/<game_id>/merger/next")
def api_merger_next(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.next_merger_player())


@app.post("/api/<game_id>/merger/finalize")
def api_merger_finalize(game_id: str) -> Any:
    return _command(game_id, lambda g, b: g.finalize_merger())


@app.post("/api/<game_id>/end")
def api_end(game_id: str) -> Any:
    return _command(game_id, lambda g, b: [[n, bal] for n, bal in g.end_game()])


if __name__ == "__main__":
    debug = env_flag("ACQUIRE_DEBUG") or env_flag("FLASK_DEBUG")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
