"""Serenity services package."""
