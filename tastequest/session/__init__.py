"""
Session gating.

Responsibilities:
- Track the swipe energy pool and per-session counters.
- Gate item reveal behind the proximity unlock rule.
- Run the read, compute, persist cycle for every user action.
"""
