"""
Command-line application for the pasterbar clipboard history watcher.
"""
