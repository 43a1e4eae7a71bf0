"""Concrete implementations of the interfaces in groupie_tracker.interfaces."""
