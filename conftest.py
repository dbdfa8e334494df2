"""
pytest configuration of the benchgraph repository.
"""

pytest_plugins = ["pytester"]
