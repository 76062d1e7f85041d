"""
Core module - Configuration, logging and exceptions.
"""
