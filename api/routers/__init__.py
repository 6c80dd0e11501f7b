"""
API Routers - Organized endpoint handlers for the Lodging API.

Each router handles a specific domain:
- inventory: guest list and dormitory layout
- assignments: committed assignments, undo/redo
- suggestions: auto-placement and the suggestion overlay
- validation: placement warnings
"""
