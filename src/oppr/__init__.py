"""
OPPR - pinball tournament ranking engine.

Computes how many ranking points a tournament is worth and how they are
shared out over the finishing order, then tracks player skill ratings.

Components:
- scoring: base value, TVA, TGP, boosters, point distribution, time decay
- ratings: pluggable rating systems (Glicko built in) and their registry
- standings: qualifying/finals merge and stored point/decay fields
- config: environment-driven settings and logging setup
"""

__version__ = "0.1.0"
