"""
Acquire core Python package.

Pure game-rule modules, free of any presentation concerns:
- board.py: Tile, Board (clump search, placement classification)
- chain.py / stock.py: hotel chains and their share pools
- founder.py / merger.py: pending founding and merger work
- player.py, deal.py: players and the tile draw pile
- game.py: Game turn orchestrator and its Phase state machine
- scoring.py: end-of-game payout
- config.py / errors.py: rule constants and rejected-command errors
"""
