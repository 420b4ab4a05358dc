"""Commandes CLI (typer + rich)."""
