"""
Test suite for the action log engine.

Focus areas:
- Structural sharing of path writes
- Action tree folding and its invariants
- Run log routing and dropped events
- Registry lifecycle and presentation state
- Event stream decoding, replay and CLI
"""
