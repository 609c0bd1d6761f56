"""
Test fixtures for the oasmodel project.
"""
