"""YAML rule data shipped with the checks (loaded via importlib.resources)."""
