"""Conversation state: timeline models, transitions and the manager."""
