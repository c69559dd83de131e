"""Agents for language-model assisted team matching."""
