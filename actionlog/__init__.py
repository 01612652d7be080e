"""
actionlog

Rebuilds immutable action call trees and state snapshots from the ordered
dispatch events of an instrumented application run.
"""

__version__ = "0.1.0"
