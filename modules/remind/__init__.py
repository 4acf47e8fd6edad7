"""Remind: risk-ranked reminder notes with local notification scheduling."""
