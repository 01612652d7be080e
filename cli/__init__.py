"""
actionlog CLI - inspect recorded action runs

Commands:
- actionlog replay - Replay an event stream and print the action trees
- actionlog log inspect - List decoded events
- actionlog version - Show version information
"""

__version__ = "0.1.0"
