"""
Taste profile learning.

Responsibilities:
- Hold the learned preference vector (cuisine, tag, spice, budget).
- Fold each swipe decision into a new profile snapshot.
- Score how compatible an item is with the current profile.
"""
