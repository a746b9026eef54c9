"""scenemirror — client-side mirror of an external video composition engine.

Keeps an observable copy of the engine's scene tree, tracks which nested
composition is being edited (breadcrumbs and per-track timeline view),
and turns editing intents into engine calls.
"""
