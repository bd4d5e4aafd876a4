"""State layer.

This package is the single source of truth for how bridged host commands
are reduced into the widget's control state.
"""
