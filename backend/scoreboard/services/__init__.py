"""Scoreboard domain services: rendering, clock, animations, operator controls.

Pure(ish) logic imported by the HTTP blueprints and the socket handlers,
keeping transport concerns separated from game state mechanics.
"""
