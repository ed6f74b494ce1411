"""
CLI Layer - Command-line interface built on Typer and Rich.
"""
