"""BannerDesk Application Package — Department → Section → Banner editor.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
