"""Quoridor rules engine and greedy bot."""
