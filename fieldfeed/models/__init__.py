"""
Models package
"""
