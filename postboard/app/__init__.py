"""Application composition layer.

Wires views, view models, adapters, and use cases into a runnable Tk window
or a console run, without placing business logic in views.
"""
