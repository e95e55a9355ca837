"""
Services package initializer.
"""
