"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command handlers,
argument parsing and validation, batched mention delivery and the message
templates shown to users.
"""
