"""GameTracker application package.

Tracks personal game libraries, merges metadata from several public catalogs and
sends release reminders for games that are not out yet.
"""
