"""ViewModel package for UI error state.

Call context:
    Front-end code binds view callbacks to ``ErrorVM`` and routes failed
    remote calls through it.

Dependencies:
    Use cases and domain types only. No transport or persistence logic.
"""
