"""ViewModel package for UI state and command surfaces.

Call context:
    ``postboard/app/main.py`` imports concrete viewmodels from this package to
    bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types and use-case results only.
    I/O adapters stay outside; the composition root injects them.

Responsibilities:
    - Expose UI state and command intent callbacks.
    - Keep MVVM boundaries explicit by never touching widgets directly.
"""
