"""
errchain unit tests.
"""
