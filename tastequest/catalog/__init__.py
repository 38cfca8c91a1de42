"""
Catalog layer.

Responsibilities:
- Define the typed Item / Location contracts shared by every engine.
- Wrap the external Item Source and Location Provider collaborators.
- Rank items by the planar distance approximation for presentation.
"""
