"""Terminal and headless front ends."""
