"""
Test package for control_recorder.

Test discovery is handled by pytest; shared fixtures live in conftest.py.
"""
