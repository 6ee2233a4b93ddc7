"""Routing — ordered route table with first-match-wins dispatch.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""
