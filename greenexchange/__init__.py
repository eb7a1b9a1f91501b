"""
Green Property Exchange - console simulation of a short-term rental exchange.
"""

__version__ = "1.0.0"
