"""Betting rules: which matches are open for betting and whether a bet is accepted."""
