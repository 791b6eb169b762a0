"""
Caca-Palavras: procedural word-search board generator

Builds word-search boards for a rotating 20-level cycle. Each level selects a
placement strategy, a word shuffle method and scoring weights, and a seeded
random source makes every board reproducible for a given level and day.

Main Components:
- core: Board data model and base interfaces
- generate: Level config, seeded random, shuffler, strategic placer, board generator
- evaluate: Board validator and diagnostic metrics
- utils: Word normalization and configuration

Quick Start:
    from caca_palavras.generate import generate_board

    board = generate_board(12, 8, ["gato", "casa", "sol"], level=1)
    for row in board.board:
        print(" ".join(row))
"""
