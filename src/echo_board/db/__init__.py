"""Persistence layer for Echo Board."""
