"""Core domain package for castgrid.

Core contains the corpus index, the seeded daily grid search, numbering, rarity
and game rules without any file, database or terminal code, keeping the puzzle
logic deterministic and portable.
"""
