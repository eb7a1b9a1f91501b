"""
Presentation layer - Typer commands and Rich rendering.
"""
